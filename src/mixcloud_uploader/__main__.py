"""Entry point for running as a module."""
from mixcloud_uploader.app import main

if __name__ == "__main__":
    raise SystemExit(main())
