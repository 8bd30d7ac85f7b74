"""Allow ``python -m relay_agents``."""

from relay_agents.scenario import cli

if __name__ == "__main__":
    cli()
