"""
WorldGrid Launcher.
Entry point for running the map viewer from the repository root.
"""

from src.app.entry import main

if __name__ == "__main__":
    main()
