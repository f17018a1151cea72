"""Pure, synchronous domain logic of CineMarathon."""
