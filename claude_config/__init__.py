"""claude-config - backup, install and sync AI assistant configuration."""

__version__ = "0.1.0"
