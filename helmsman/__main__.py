"""
Allow `python -m helmsman` invocation (same as the `helmsman` console script).
"""
from helmsman.launcher import cli

if __name__ == "__main__":
    cli()
