from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QuadraticForm:
    """
    n = xx·x² + xy·x·y + yy·y² + xz·x·z + yz·y·z + zz·z² + const

    The defaults are the search's fixed form; other coefficients exist only so
    tests can substitute a simpler one.
    """
    xx: int = 5
    xy: int = 7
    yy: int = 11
    xz: int = 23
    yz: int = 47
    zz: int = 83
    const: int = 107

    def evaluate(self, x: int, y: int, z: int) -> int:
        return (
            self.xx * x * x
            + self.xy * x * y
            + self.yy * y * y
            + self.xz * x * z
            + self.yz * y * z
            + self.zz * z * z
            + self.const
        )

    __call__ = evaluate

    def __str__(self) -> str:
        return (f"{self.xx}x² + {self.xy}xy + {self.yy}y² + {self.xz}xz + "
                f"{self.yz}yz + {self.zz}z² + {self.const}")


DEFAULT_FORM = QuadraticForm()


def compute_candidate(x: int, y: int, z: int, form: QuadraticForm = DEFAULT_FORM) -> int:
    """Evaluate the form on (x, y, z); exact for any size of integer."""
    return form.evaluate(int(x), int(y), int(z))
