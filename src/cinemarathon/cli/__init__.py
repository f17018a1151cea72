"""CineMarathon command-line interface."""
