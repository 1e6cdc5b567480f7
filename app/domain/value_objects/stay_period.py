"""Value Object StayPeriod - rango de fechas de una estancia."""

from dataclasses import dataclass
from datetime import date, timedelta


@dataclass(frozen=True)
class StayPeriod:
    """
    Value Object inmutable que representa las fechas de una estancia.

    Attributes:
        check_in: Fecha de llegada.
        check_out: Fecha de salida.
    """

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if self.check_in >= self.check_out:
            raise ValueError(
                f"check_in debe ser anterior a check_out: {self.check_in} >= {self.check_out}"
            )

    @property
    def duration(self) -> timedelta:
        return self.check_out - self.check_in

    @property
    def nights(self) -> int:
        """Número de noches de la estancia."""
        return self.duration.days

    def __str__(self) -> str:
        return f"{self.check_in.isoformat()} -> {self.check_out.isoformat()}"
