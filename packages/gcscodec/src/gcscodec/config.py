# packages/gcscodec/src/gcscodec/config.py
from __future__ import annotations
from dataclasses import dataclass
import os

from gcscore.digests import DEFAULT_DIGEST, DigestLike, resolve
from gcscore.errors import InvalidParamsError

__all__ = ["GcsConfig", "default_digest_name", "MAX_DOMAIN"]

#: Les empreintes sont des entiers non signés 64 bits : n·2^p doit tenir dans [1, 2^64].
MAX_DOMAIN = 1 << 64


def default_digest_name() -> str:
    """Nom de digest par défaut (ENV `GCS_DIGEST`, sinon "md5")."""
    v = os.getenv("GCS_DIGEST", "").strip()
    return v or DEFAULT_DIGEST


@dataclass(frozen=True, slots=True)
class GcsConfig:
    """
    Paramètres **immuables** d'un Golomb-Coded Set.

    Champs
    ------
    n : int
        Nombre maximal d'éléments (capacité). Doit être > 0.
    p : int
        Exposant de faux positif : probabilité cible 1/2^p à pleine capacité. Doit être >= 1.
    digest : str | DigestLike
        Algorithme de hachage : nom du registre `gcscore.digests` ou objet
        exposant `digest_size` / `digest(data)`. Non sérialisé dans le flux :
        comme n et p, il doit accompagner les octets.

    Notes
    -----
    - Aucune valeur par défaut pour n et p.
    - Les validations lèvent `InvalidParamsError` (sous-classe de ValueError).
    """

    n: int
    p: int
    digest: str | DigestLike = DEFAULT_DIGEST

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, int):
            raise InvalidParamsError("GcsConfig.n must be an int")
        if isinstance(self.p, bool) or not isinstance(self.p, int):
            raise InvalidParamsError("GcsConfig.p must be an int")
        if self.n <= 0:
            raise InvalidParamsError("GcsConfig.n must be > 0")
        if self.p < 1:
            raise InvalidParamsError("GcsConfig.p must be >= 1")
        if self.n << self.p > MAX_DOMAIN:
            raise InvalidParamsError(f"GcsConfig: n·2^p = {self.n << self.p} overflows the 64-bit domain")
        resolve(self.digest)  # UnknownDigestError / TypeError au plus tôt

    @property
    def modulus(self) -> int:
        """Taille du domaine des empreintes : n·2^p."""
        return self.n << self.p

    def hasher(self) -> DigestLike:
        return resolve(self.digest)

    @property
    def digest_name(self) -> str:
        return self.digest if isinstance(self.digest, str) else getattr(self.digest, "name", type(self.digest).__name__)

    @staticmethod
    def from_env(n: int, p: int) -> "GcsConfig":
        return GcsConfig(n=n, p=p, digest=default_digest_name())
