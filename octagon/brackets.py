"""Double elimination bracket layout: which seeds meet in which round.

The loser-bracket placement rules were found by building brackets on start.gg.
"Flipping" reverses the order of players dropping from winners
(5, 6, 7, 8 -> 8, 7, 6, 5); "swapping" exchanges the two halves
(5, 6, 7, 8 -> 7, 8, 5, 6); both together give 6, 5, 8, 7.
"""

from __future__ import annotations

from .models import Bracket, Set

FLIP_MAP: dict[int, tuple[bool, ...]] = {
    8: (True,),
    16: (True, False),
    32: (True, True, True),
    64: (True, True, False, False),
    128: (True, True, False, False, True),
}

SWAP_MAP: dict[int, tuple[bool, ...]] = {
    8: (False,),
    16: (False, False),
    32: (False, True, False),
    64: (False, True, True, False),
    128: (False, True, True, False, False),
}


def create_round(n: int, k: int) -> list[int]:
    """Standard seed order for a round of n slots, offset by k."""
    if n < 2:
        return []
    if n == 2:
        return [1, 2]
    result: list[int] = []
    for num in create_round(n // 2, 0):
        result.extend((num + k, n + 1 - num + k))
    return result


def create_sets(round_: list[int]) -> list[Set]:
    """Pair consecutive seeds into sets."""
    return [Set(player1=a, player2=b) for a, b in zip(round_[0::2], round_[1::2])]


def reduce_winners(round_: list[int]) -> list[int]:
    """Keep the better seed of each pair."""
    return [min(a, b) for a, b in zip(round_[0::2], round_[1::2])]


def reduce_losers(round_: list[int]) -> list[int]:
    """Keep the worse seed of each pair."""
    return [max(a, b) for a, b in zip(round_[0::2], round_[1::2])]


def carry_down(lr: list[int], wr: list[int], size: int, round_index: int) -> list[int]:
    """Merge the losers of a winners round into the losers bracket."""
    flip = swap = False
    if len(lr) > 2:
        try:
            flip = FLIP_MAP[size][round_index]
            swap = SWAP_MAP[size][round_index]
        except (KeyError, IndexError):
            raise ValueError(
                f"unsupported bracket size {size} at round {round_index}"
            ) from None

    dropped = reduce_losers(reduce_winners(wr))
    survivors = reduce_winners(lr)

    if flip:
        dropped.reverse()
    if swap:
        half = len(dropped) // 2
        dropped = dropped[half:] + dropped[:half]

    result = [0] * len(lr)
    for i, (loser, survivor) in enumerate(zip(dropped, survivors)):
        result[2 * i] = loser
        result[2 * i + 1] = survivor
    return result


def create_bracket(num_players: int) -> Bracket:
    """Lay out every set of a double elimination bracket up to grand finals."""
    n = 1 << (num_players - 1).bit_length() if num_players >= 1 else 0

    sets: list[Set] = []
    winners_rounds: list[list[Set]] = []
    losers_rounds: list[list[Set]] = []

    wr = create_round(n, 0)
    lr = create_round(n // 2, n // 2)

    round_index = 0
    while len(wr) > 2:
        if round_index:
            wr = reduce_winners(wr)
            lr = reduce_winners(lr)

        wr_sets = create_sets(wr)
        sets.extend(wr_sets)
        winners_rounds.append(wr_sets)

        if len(wr) > 2:
            lr_sets = create_sets(lr)
            sets.extend(lr_sets)
            losers_rounds.append(lr_sets)

            lr = carry_down(lr, wr, n, round_index)
            lr_sets = create_sets(lr)
            sets.extend(lr_sets)
            losers_rounds.append(lr_sets)

        round_index += 1

    return Bracket(
        sets=[s for s in sets if s.player1 <= num_players and s.player2 <= num_players],
        winners_rounds=winners_rounds,
        losers_rounds=losers_rounds,
    )