"""Golf tournament scoring bot: Stableford leaderboards with a cut and team best-ball."""
