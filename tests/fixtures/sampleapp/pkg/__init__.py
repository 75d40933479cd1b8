"""Sample application scanned by the ddlgen test-suite."""
