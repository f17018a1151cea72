"""CineMarathon: movie marathon planning over TMDB and YouTube."""

__version__ = "0.1.0"
