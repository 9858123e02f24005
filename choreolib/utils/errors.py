"""
Custom exception types for the choreolib load pipeline.
Keep this focused and non-redundant; prefer built-ins where appropriate.
"""


class ChoreoConfigError(RuntimeError):
    """Fatal deployment misconfiguration (project file, format version, drive type)."""

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"Choreo Config Error: {message}")

    def __str__(self):
        return f"Choreo Config Error: {self.original_message}"


class TrajectoryLoadError(RuntimeError):
    """Trajectory document could not be turned into a trajectory (malformed shape)."""

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"Trajectory Load Error: {message}")

    def __str__(self):
        return f"Trajectory Load Error: {self.original_message}"
