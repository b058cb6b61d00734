"""Version parsing, catalogs and resolution."""
