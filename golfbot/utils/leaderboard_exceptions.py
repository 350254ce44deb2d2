"""
Custom exceptions for the scoring system with user-friendly error messages.

Scoring data problems (a bad differential, a hole with no details) are not
raised: the calculators log them and leave the hole out. These exceptions
cover invalid requests and writes.
"""

class LeaderboardException(Exception):
    """Base exception for leaderboard-related errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class InvalidDayError(LeaderboardException):
    """Raised when a day outside the tournament is requested."""
    def __init__(self, day_num: int):
        super().__init__(
            f"Invalid tournament day {day_num}",
            f"❌ Day {day_num} is not part of the tournament. Pick day 1, 2 or 3."
        )

class InvalidTournamentContextError(LeaderboardException):
    """Raised when a tournament context name cannot be resolved."""
    def __init__(self, context: str):
        super().__init__(
            f"Unknown tournament context '{context}'",
            f"❌ '{context}' is not a leaderboard. Use Mosley Open or Twisted Creek."
        )

class ScoreValidationError(LeaderboardException):
    """Raised when a score entry fails validation."""
    def __init__(self, score, reason: str):
        super().__init__(
            f"Invalid score {score}: {reason}",
            f"❌ {reason}"
        )

class CourseValidationError(LeaderboardException):
    """Raised when a course's hole layout is invalid."""
    def __init__(self, course_name: str, reason: str):
        super().__init__(
            f"Invalid course '{course_name}': {reason}",
            f"❌ Course '{course_name}' was not saved: {reason}"
        )

class PlayerNotFoundError(LeaderboardException):
    """Raised when a player is not found."""
    def __init__(self, player: str):
        super().__init__(
            f"Player '{player}' not found",
            f"❌ Player '{player}' is not registered for the tournament!"
        )

class TeamNotFoundError(LeaderboardException):
    """Raised when a team is not found."""
    def __init__(self, team: str):
        super().__init__(
            f"Team '{team}' not found",
            f"❌ Team '{team}' does not exist!"
        )

class DatabaseError(LeaderboardException):
    """Raised when database operations fail."""
    def __init__(self, operation: str, details: str = None):
        super().__init__(
            f"Database error during {operation}: {details}",
            "❌ Database error occurred. Please try again later."
        )
