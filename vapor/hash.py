"""
Field-native sponge hash over the BN254 scalar field.

``field_hash`` compresses an ordered sequence of field elements into one
element of ``Fr``.  It is arithmetic-only (an  x^5  S-box plus round
constants) so the same computation can be re-done inside a BN254
circuit when the deposit is later condensed.

Construction (version ``v1``)::

    state ← DOMAIN
    for each input m:
        state ← state + m
        for i in 0..7:   state ← state^5 + C[i mod 16]
    for i in 0..3:       state ← state^5 + C[(i + 8) mod 16]

This is a simplified, non-standard sponge: there is no MDS / diffusion
layer between rounds.  The round constants are the first sixteen
Poseidon BN254 constants (t = 4) and are frozen.  Any change to the
constants or the round schedule changes every derived address, and must
not be made without a dedicated security review.
"""

from __future__ import annotations

from typing import Iterable, Tuple, Union

from .field import Fr, BN254_R

HASH_VERSION = "v1"

# ── fixed public parameters (v1) ────────────────────────────────────────
DOMAIN = 0x736F6C616E61766170B6F72

ROUND_CONSTANTS: Tuple[int, ...] = (
    14397397413755236225575615486459253198602422701513067526754101844196324375522,
    10405129301473404666785234951972711717481302463898292859783056520670200613128,
    5179144822360023508491245509308555580251733042407187134628755730783052214509,
    9132640374240188374542843306219594180154739721841249568925550236430986592615,
    20360807315276763881209958738450444293273549928693737723235350358403012458514,
    17933600965499023212689924809448543050840131883187652471064418452962948061619,
    3636213416533737411392076250708419981662897009810345015164671602334517041153,
    2008540005368330234524962342006691994500273283000229509835662097352946198608,
    16018407964853379535338740313053768402596521780991140819786560130595652651567,
    20653139667070586705378398435856186172195806027708437373983929336015162186471,
    17887713874711369695406927657694993484804203950786668963083965074738838960704,
    4852706232225925756777361208698488277369799648067343227630786518486608711772,
    8969172011633935669771678412400911310465619639756845342775631896478908389850,
    20570199545627577691240476121888846460936245025392381957866134167601058684375,
    16442329894745639881165035015179028112772410105963688121820543219662832524136,
    20060625627350485876280451423010593928172611031611836167979515653463693899374,
)

ABSORB_ROUNDS = 8
FINAL_ROUNDS = 4


# ── internal helpers ────────────────────────────────────────────────────
def _round(state: int, index: int) -> int:
    """One  x^5 + C  round in Z_r."""
    c = ROUND_CONSTANTS[index % len(ROUND_CONSTANTS)]
    return (pow(state, 5, BN254_R) + c) % BN254_R


def _absorb(state: int, value: int) -> int:
    state = (state + value % BN254_R) % BN254_R
    for i in range(ABSORB_ROUNDS):
        state = _round(state, i)
    return state


def _finalize(state: int) -> int:
    for i in range(FINAL_ROUNDS):
        state = _round(state, i + ABSORB_ROUNDS)
    return state


# ── public hash function ────────────────────────────────────────────────
def field_hash(inputs: Iterable[Union[int, Fr]]) -> Fr:
    """
    Hash an ordered sequence of field elements to one ``Fr``.

    Plain integers are reduced modulo  r  before absorption.  An empty
    sequence hashes to the finalized domain constant.
    """
    state = DOMAIN % BN254_R
    for value in inputs:
        state = _absorb(state, int(value))
    return Fr(_finalize(state))
