"""
Draft errors.

Every rejection the draft engine can produce. Each class carries the
``kind`` string returned to polling clients and the HTTP status the API
answers with.
"""


class DraftError(Exception):
    """Base exception for all draft-related errors"""

    kind = "DraftError"
    status_code = 400


class LeagueNotFound(DraftError):
    kind = "LeagueNotFound"
    status_code = 404


class PlayerNotFound(DraftError):
    kind = "PlayerNotFound"
    status_code = 404


class AccessDenied(DraftError):
    """Raised when the caller may not act on the league"""

    kind = "AccessDenied"
    status_code = 403


class NotAParticipant(DraftError):
    kind = "NotAParticipant"
    status_code = 403


class LeagueNotDrafting(DraftError):
    kind = "LeagueNotDrafting"


class DraftNotActive(DraftError):
    kind = "DraftNotActive"


class NotYourTurn(DraftError):
    kind = "NotYourTurn"


class PlayerUnavailable(DraftError):
    """Raised when the player is outside the pool or already drafted"""

    kind = "PlayerUnavailable"


class RosterFull(DraftError):
    kind = "RosterFull"


class PickInProgress(DraftError):
    """Raised when the same user already has a pick in flight"""

    kind = "PickInProgress"
    status_code = 429


class DraftStateConflict(DraftError):
    """Raised when the league changed between load and commit"""

    kind = "DraftStateConflict"
    status_code = 409


class DraftOrderInvalid(DraftError):
    """Raised when turn math cannot produce a valid turn holder"""

    kind = "DraftOrderInvalid"
    status_code = 500


class InvalidLeagueTransition(DraftError):
    kind = "InvalidLeagueTransition"


class NotEnoughParticipants(DraftError):
    kind = "NotEnoughParticipants"


class LeagueFull(DraftError):
    kind = "LeagueFull"


class AlreadyJoined(DraftError):
    kind = "AlreadyJoined"
    status_code = 409
