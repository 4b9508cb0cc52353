# packages/gcscodec/src/gcscodec/bitstream/bits.py
# -----------------------------------------------------------------------------
# Curseur de bits MSB-first (écriture / lecture) pour les flux Golomb-Rice

from __future__ import annotations
from typing import Optional

from gcscore.errors import DecodeError

__all__ = ["BitWriter", "BitReader"]

# Taille max d'un bloc de 1 écrit d'un coup par write_unary
_RUN = 56


class BitWriter:
    """
    Accumule des bits MSB-first et produit des octets complets.

    Le dernier octet est complété par des zéros dans `to_bytes()` ; la longueur
    exacte en bits reste disponible via `nbits`.
    """

    def __init__(self) -> None:
        self._buf = bytearray()
        self._acc = 0   # bits en attente (< 8)
        self._nacc = 0

    @property
    def nbits(self) -> int:
        return len(self._buf) * 8 + self._nacc

    def write_bit(self, bit: int) -> None:
        self.write_bits(bit & 1, 1)

    def write_bits(self, value: int, count: int) -> None:
        """Écrit les `count` bits de poids faible de `value`, MSB d'abord."""
        if count < 0:
            raise ValueError("write_bits: count must be >= 0")
        if count == 0:
            return
        self._acc = (self._acc << count) | (int(value) & ((1 << count) - 1))
        self._nacc += count
        while self._nacc >= 8:
            self._nacc -= 8
            self._buf.append((self._acc >> self._nacc) & 0xFF)
        self._acc &= (1 << self._nacc) - 1

    def write_unary(self, q: int) -> None:
        """`q` bits à 1 suivis d'un 0 terminal."""
        if q < 0:
            raise ValueError("write_unary: q must be >= 0")
        while q >= _RUN:
            self.write_bits((1 << _RUN) - 1, _RUN)
            q -= _RUN
        self.write_bits(((1 << q) - 1) << 1, q + 1)

    def to_bytes(self) -> bytes:
        out = bytes(self._buf)
        if self._nacc:
            out += bytes([(self._acc << (8 - self._nacc)) & 0xFF])
        return out

    def reader(self) -> "BitReader":
        """Curseur de lecture sur les bits écrits (longueur exacte, sans padding)."""
        return BitReader(self.to_bytes(), nbits=self.nbits)


class BitReader:
    """
    Curseur sur un buffer de bits MSB-first.

    Paramètres
    ----------
    data : bytes
        Buffer source.
    nbits : int | None
        Nombre de bits valides (défaut : 8 * len(data)).
    padded : bool
        Le buffer vient d'un flux aligné sur l'octet : moins de 8 bits restants,
        tous à zéro, sont du bourrage et marquent la fin des données.
    """

    def __init__(self, data: bytes, nbits: Optional[int] = None, padded: bool = False) -> None:
        self._data = bytes(data)
        total = len(self._data) * 8
        if nbits is None:
            nbits = total
        if not (0 <= nbits <= total):
            raise ValueError(f"BitReader: nbits={nbits} out of range [0, {total}]")
        self._nbits = int(nbits)
        self._pos = 0
        self._padded = bool(padded)

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return self._nbits - self._pos

    @property
    def exhausted(self) -> bool:
        return self._pos >= self._nbits

    def _bit(self, i: int) -> int:
        return (self._data[i >> 3] >> (7 - (i & 7))) & 1

    def peek(self) -> Optional[int]:
        """Bit courant sans avancer ; None si le flux est épuisé."""
        if self.exhausted:
            return None
        return self._bit(self._pos)

    def advance(self, k: int = 1) -> None:
        if k < 0 or k > self.remaining:
            raise DecodeError(f"advance: cannot skip {k} bits ({self.remaining} remaining)")
        self._pos += k

    def read_bit(self) -> int:
        b = self.peek()
        if b is None:
            raise DecodeError("read_bit: end of stream")
        self._pos += 1
        return b

    def read_bits(self, count: int) -> int:
        """Lit `count` bits MSB-first ; DecodeError si moins de `count` bits restent."""
        if count < 0:
            raise ValueError("read_bits: count must be >= 0")
        if count > self.remaining:
            raise DecodeError(f"read_bits: need {count} bits, {self.remaining} remaining")
        if count == 0:
            return 0
        start, end = self._pos, self._pos + count
        lo, hi = start >> 3, (end + 7) >> 3
        chunk = int.from_bytes(self._data[lo:hi], "big")
        chunk >>= hi * 8 - end
        self._pos = end
        return chunk & ((1 << count) - 1)

    def read_unary(self) -> int:
        """Compte les 1 jusqu'au 0 terminal (consommé) ; DecodeError si le flux s'arrête avant."""
        q = 0
        while True:
            # saut rapide des octets pleins quand on est aligné
            if (self._pos & 7) == 0 and self.remaining >= 8 and self._data[self._pos >> 3] == 0xFF:
                q += 8
                self._pos += 8
                continue
            b = self.peek()
            if b is None:
                raise DecodeError(f"read_unary: stream ended before terminating zero (q={q})")
            self._pos += 1
            if b == 0:
                return q
            q += 1

    def at_end(self) -> bool:
        """Fin des données : flux épuisé, ou seul le bourrage d'alignement reste."""
        if self.exhausted:
            return True
        if not self._padded or self.remaining >= 8:
            return False
        pos = self._pos
        tail = self.read_bits(self.remaining)
        self._pos = pos
        return tail == 0
