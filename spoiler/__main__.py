"""``python -m spoiler`` runs the same entrypoint as the ``spoiler`` script."""

from .cli import main

if __name__ == "__main__":
    main()
