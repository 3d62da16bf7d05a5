"""Exceptions raised by the floor-plan domain."""


class CalibrationDegenerate(ValueError):
    """Raised when calibration reference points cannot define a scale.

    The reference points coincide or lie closer together than the
    numerical stability threshold. No Calibration is produced.

    Attributes:
        reference_distance: Distance between the two reference points.
    """

    def __init__(self, message: str, reference_distance: float = 0.0) -> None:
        self.reference_distance = reference_distance
        super().__init__(message)


class CalibrationRequired(RuntimeError):
    """Raised when a reference-space operation runs without a calibration."""

    pass
