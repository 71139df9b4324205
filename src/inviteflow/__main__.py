"""Entry point for 'python -m inviteflow' command."""

from inviteflow.cli import main

if __name__ == "__main__":
    main()
