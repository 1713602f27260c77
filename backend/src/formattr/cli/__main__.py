"""CLI entry point for formattr.cli module.

Enables execution via: python -m formattr.cli OPERATION [OPTIONS]
"""

from formattr.cli.attributes import main

if __name__ == "__main__":
    main()
