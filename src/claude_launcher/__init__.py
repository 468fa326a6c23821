"""Claude Launcher - browse and relaunch Claude Code sessions in tmux."""

__version__ = "0.1.0"
