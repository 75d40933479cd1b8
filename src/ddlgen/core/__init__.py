"""Core building blocks of ddlgen.

Modules
-------
errors      DdlError hierarchy (ConfigurationError, GenerationError, ...)
logging     structlog configuration and helpers
dialect     closed dialect registry (resolve, resolve_all)
overlay     property overlay loader (XML / YAML)
scanner     namespace scan for entities and embeddables
sync        write-if-changed output synchronisation
config      DdlSettings and [tool.ddlgen] project config

Tags:
    ddlgen, core

Doc-Types:
    package-overview, module-index
"""
