"""Package whose submodule cannot be imported."""
