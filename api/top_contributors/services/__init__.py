"""GitHub client, contributor ranking and the leaderboard driver."""
