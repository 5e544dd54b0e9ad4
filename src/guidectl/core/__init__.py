"""Runtime plumbing shared by commands and checks."""
