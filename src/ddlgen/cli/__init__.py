"""ddlgen command-line interface (Typer + Rich).

Modules
-------
app         root Typer app, --version, logging setup
generate    ddlgen generate
dialects    ddlgen dialects
config      ddlgen config show
utils       consoles, output helpers, error reporting
"""
