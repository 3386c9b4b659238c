"""semver-gen command line interface."""
