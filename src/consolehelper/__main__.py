"""Allow running as python -m consolehelper."""

from .cli import main

if __name__ == "__main__":
    main()
