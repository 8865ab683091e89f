class LevelError(Exception):
    pass

class PlacementExhausted(LevelError):
    """A bounded rejection-sampling loop found no acceptable tile."""

    def __init__(self, what: str, attempts: int):
        super().__init__(f"could not place {what} after {attempts} attempts")
        self.what = what
        self.attempts = attempts

class MissingPlayer(LevelError):
    pass

class LevelFormatError(LevelError, ValueError):
    pass
