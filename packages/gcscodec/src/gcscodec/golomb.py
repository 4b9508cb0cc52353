# packages/gcscodec/src/gcscodec/golomb.py
# -----------------------------------------------------------------------------
# Codage de Golomb-Rice (module 2^p) - primitive unique du pack / unpack

from __future__ import annotations
from typing import Iterable, List, Optional

from gcscore.errors import DecodeError, InvalidParamsError
from .bitstream.bits import BitWriter, BitReader

"""
Golomb-Rice
===========

Un entier v >= 0 est découpé en quotient q = v >> p et reste r = v & (2^p - 1) :

    [ 1 ] * q  |  0  |  r sur p bits (MSB d'abord)

Le code est auto-terminé : aucun séparateur n'est nécessaire entre deux codes
consécutifs. Pour des deltas de valeurs triées tirées uniformément, la loi des
écarts est quasi géométrique et le module 2^p est (quasi) optimal.

Contrat
-------
- p >= 1 : p == 0 laisserait un reste vide, on refuse **avant** d'émettre.
- decode ne boucle jamais indéfiniment : la lecture unaire est bornée par la
  fin du flux et lève DecodeError, de même qu'un reste tronqué.
"""

__all__ = [
    "golomb_encode",
    "golomb_decode",
    "golomb_encode_all",
    "golomb_decode_all",
    "code_length",
]


def _check_p(p: int, who: str) -> int:
    if int(p) < 1:
        raise InvalidParamsError(f"{who}: p must be >= 1 (got {p})")
    return int(p)


def golomb_encode(value: int, p: int, writer: Optional[BitWriter] = None) -> BitWriter:
    """
    Encode `value` en Golomb-Rice de paramètre `p`.

    Paramètres
    ----------
    value : int
        Entier >= 0.
    p : int
        Largeur du reste en bits (>= 1).
    writer : BitWriter | None
        Si fourni, le code est ajouté à la suite ; sinon un nouveau writer est créé.

    Retour
    ------
    BitWriter
        Le writer contenant le code.

    Exceptions
    ----------
    InvalidParamsError si p < 1 ou value < 0.
    """
    p = _check_p(p, "golomb_encode")
    value = int(value)
    if value < 0:
        raise InvalidParamsError(f"golomb_encode: value must be >= 0 (got {value})")
    w = writer if writer is not None else BitWriter()
    w.write_unary(value >> p)
    w.write_bits(value & ((1 << p) - 1), p)
    return w


def golomb_decode(reader: BitReader, p: int) -> int:
    """
    Décode **un** code Golomb-Rice à la position courante de `reader`.

    Exceptions
    ----------
    DecodeError si le flux s'arrête avant le 0 terminal ou avant les p bits du reste.
    InvalidParamsError si p < 1.
    """
    p = _check_p(p, "golomb_decode")
    q = reader.read_unary()
    r = reader.read_bits(p)
    return (q << p) + r


def golomb_encode_all(values: Iterable[int], p: int, writer: Optional[BitWriter] = None) -> BitWriter:
    """Concatène les codes de `values` (dans l'ordre) dans un même writer."""
    p = _check_p(p, "golomb_encode_all")
    w = writer if writer is not None else BitWriter()
    for v in values:
        golomb_encode(v, p, w)
    return w


def golomb_decode_all(reader: BitReader, p: int, limit: Optional[int] = None) -> List[int]:
    """
    Décode tous les codes jusqu'à la fin des données (`reader.at_end()`).

    `limit` borne le nombre de valeurs : un code supplémentaire lève DecodeError.
    Aucun résultat partiel n'est renvoyé en cas d'erreur.
    """
    p = _check_p(p, "golomb_decode_all")
    out: List[int] = []
    while not reader.at_end():
        if limit is not None and len(out) >= limit:
            raise DecodeError(f"golomb_decode_all: more than {limit} values in stream")
        out.append(golomb_decode(reader, p))
    return out


def code_length(value: int, p: int) -> int:
    """Longueur en bits du code de `value` : (value >> p) + 1 + p."""
    p = _check_p(p, "code_length")
    return (int(value) >> p) + 1 + p
