"""Container entrypoint for the GitHub Action."""

from edge_addon_action.cli.main import main

if __name__ == "__main__":
    main()
