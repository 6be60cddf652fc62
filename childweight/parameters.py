"""Per-individual sex-blended model coefficients.

Every coefficient in constants.SEX_COEFFICIENTS is blended once per
individual as male*(1 - sex) + female*sex and then read on every
derivative evaluation.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

import numpy as np

from childweight.constants import SEX_COEFFICIENTS


class SexParameterSet:
    """Read-only coefficient vectors, one entry per individual.

    Coefficients are exposed as attributes (``params.K``, ``params.tauA_EB``)
    and through ``params['K']``.
    """

    def __init__(self, sex: np.ndarray,
                 coefficients: Mapping[str, tuple] = SEX_COEFFICIENTS):
        sex = np.asarray(sex, dtype=np.float64)
        values = {}
        for name, (male, female) in coefficients.items():
            arr = male * (1.0 - sex) + female * sex
            arr.setflags(write=False)
            values[name] = arr
        self._values = MappingProxyType(values)
        self.n = len(sex)

    def __getattr__(self, name: str) -> np.ndarray:
        try:
            return self.__dict__['_values'][name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} has no coefficient '{name}'"
            ) from None

    def __getitem__(self, name: str) -> np.ndarray:
        return self._values[name]

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def names(self):
        return list(self._values)

    def kernel_coefficients(self, suffix: str = '') -> tuple:
        """The nine growth-kernel vectors (A, B, D, tA, tB, tD, tauA, tauB, tauD).

        suffix selects the instantiation: '' for growth dynamic, '1' for
        growth impact, '_EB' for energy-balance impact.
        """
        return tuple(
            self._values[f"{base}{suffix}"]
            for base in ('A', 'B', 'D', 'tA', 'tB', 'tD', 'tauA', 'tauB', 'tauD')
        )
