"""Built-in CLI sub-commands for oas2sls.

* :mod:`~oas2sls.commands.convert` -- generate serverless function configs
  and print them or write one file per service.
* :mod:`~oas2sls.commands.inspect` -- list the functions that would be
  generated, as a table.
* :mod:`~oas2sls.commands.common` -- option declarations and the
  load-and-convert step shared by both.

Each module exports a plain callback function registered directly on the
root app.
"""
