"""``python -m omega``: open a project or file and print the session status."""

from .cli import main


if __name__ == "__main__":
    main()
