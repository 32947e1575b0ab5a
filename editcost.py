"""Weighted edit distance with enumeration of every optimal edit script.

Costs are quantized to integer units of 10**-precision before any arithmetic,
so ties between alternative paths are detected exactly.
"""


import logging
import math


from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, NamedTuple, Optional, Sequence, Tuple


INS_COST = 0.5
DEL_COST = 0.4
CHANGE_COST = 1.2
PRECISION = 1


class Op(Enum):
    DEL = 1
    INS = 2
    SUB = 3
    MATCH = 4


SYMBOLS = {Op.DEL: 'D', Op.INS: 'I', Op.SUB: 'C', Op.MATCH: 'C'}
MOVES = {Op.DEL: (1, 0), Op.INS: (0, 1), Op.SUB: (1, 1), Op.MATCH: (1, 1)}


Cost = float
Matrix = List[List[Cost]]
String = Sequence[Any]


def quantize(value: Cost, precision: int=PRECISION) -> int:
    return round(value * 10 ** precision)


@dataclass(frozen=True)
class Costs:
    """Per-operation costs, given to `precision` decimal places.

    The change cost applies only when the aligned symbols differ; copying a
    symbol is free. Negative costs break optimal substructure and are
    rejected.
    """
    insert: Cost = INS_COST
    delete: Cost = DEL_COST
    change: Cost = CHANGE_COST
    precision: int = PRECISION

    def __post_init__(self) -> None:
        if self.precision < 0:
            raise ValueError(f'precision must be non-negative, got {self.precision}')
        for name in ('insert', 'delete', 'change'):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f'{name} cost must be finite, got {value}')
            if value < 0:
                raise ValueError(f'{name} cost must be non-negative, got {value}')
            if not math.isclose(value * 10 ** self.precision,
                    quantize(value, self.precision), abs_tol=1e-6):
                raise ValueError(f'{name} cost {value} has more than '
                        f'{self.precision} decimal places')

    def to_units(self, value: Cost) -> int:
        return quantize(value, self.precision)

    def from_units(self, units: int) -> Cost:
        return units / 10 ** self.precision

    def in_units(self) -> Tuple[int, int, int]:
        """Returns the insert, delete and change costs in integer units."""
        return (self.to_units(self.insert), self.to_units(self.delete),
                self.to_units(self.change))


DEFAULT_COSTS = Costs()


class Step(NamedTuple):
    """One decision: the cell (i, j) reached and the operation reaching it.

    The origin step has no operation.
    """
    i: int
    j: int
    op: Optional[Op] = None

    def __str__(self) -> str:
        if self.op is None:
            return f'[{self.i},{self.j}]'
        return f'[{self.i},{self.j}]-{SYMBOLS[self.op]}'


Script = Tuple[Step, ...]


ORIGIN = Step(0, 0)


def matrix(source: String, target: String, costs: Costs=DEFAULT_COSTS) -> Matrix:
    ins_cost, del_cost, change_cost = costs.in_units()
    height = len(source) + 1
    width = len(target) + 1
    table = [[0 for j in range(width)] for i in range(height)]
    for i in range(height):
        table[i][0] = i * del_cost
    for j in range(width):
        table[0][j] = j * ins_cost
    for i in range(1, height):
        for j in range(1, width):
            ins = table[i][j - 1] + ins_cost
            dele = table[i - 1][j] + del_cost
            sub = table[i - 1][j - 1]
            if source[i - 1] != target[j - 1]:
                sub += change_cost
            table[i][j] = min((ins, dele, sub))
    logging.debug('Built %dx%d cost matrix', height, width)
    return [[costs.from_units(c) for c in row] for row in table]


def distance(matrix: Matrix) -> Cost:
    return matrix[-1][-1]


def scripts(source: String, target: String, matrix: Matrix,
        costs: Costs=DEFAULT_COSTS) -> Iterator[Script]:
    """Yields every minimum-cost script, in order of discovery.

    Walks back from the bottom-right cell depth-first, following each of the
    insert, delete and change/copy edges (in that order) whose cost accounts
    exactly for the difference between two cells. Every pending branch holds
    its own tuple of steps, so sibling branches share nothing but the matrix,
    which is only read. The number of scripts is not capped.
    """
    ins_cost, del_cost, change_cost = costs.in_units()
    table = [[costs.to_units(c) for c in row] for row in matrix]
    optimum = table[-1][-1]
    stack: List[Tuple[int, int, Script]] = [(len(table) - 1, len(table[0]) - 1, ())]
    while stack:
        i, j, path = stack.pop()
        cost = table[i][j]
        if cost > optimum:
            continue
        if i == 0 and j == 0:
            script = (ORIGIN,) + path[::-1]
            logging.debug('Found script: %s', ' '.join(str(s) for s in script))
            yield script
            continue
        branches = []
        if j > 0 and table[i][j - 1] == cost - ins_cost:
            branches.append((i, j - 1, path + (Step(i, j, Op.INS),)))
        if i > 0 and table[i - 1][j] == cost - del_cost:
            branches.append((i - 1, j, path + (Step(i, j, Op.DEL),)))
        if i > 0 and j > 0:
            if source[i - 1] == target[j - 1]:
                op, step_cost = Op.MATCH, 0
            else:
                op, step_cost = Op.SUB, change_cost
            if table[i - 1][j - 1] == cost - step_cost:
                branches.append((i - 1, j - 1, path + (Step(i, j, op),)))
        # Reversed so that the first branch found is explored first.
        stack.extend(reversed(branches))


def all_scripts(source: String, target: String, matrix: Matrix,
        costs: Costs=DEFAULT_COSTS) -> List[Script]:
    return list(scripts(source, target, matrix, costs))


def script_cost(script: Script, costs: Costs=DEFAULT_COSTS) -> Cost:
    ins_cost, del_cost, change_cost = costs.in_units()
    op_costs = {Op.INS: ins_cost, Op.DEL: del_cost, Op.SUB: change_cost, Op.MATCH: 0}
    return costs.from_units(sum(op_costs[s.op] for s in script if s.op is not None))


def apply(source: String, target: String, script: Script) -> List[Any]:
    """Replays script over source and returns the resulting symbols.

    Inserted and changed symbols are taken from target. Raises ValueError if
    the script is not a connected path from [0,0] to [n,m].
    """
    if not script or script[0] != ORIGIN:
        raise ValueError('script must start at [0,0]')
    result = []
    i, j = 0, 0
    for step in script[1:]:
        if step.op is None:
            raise ValueError(f'step {step} has no operation')
        di, dj = MOVES[step.op]
        i, j = i + di, j + dj
        if (step.i, step.j) != (i, j):
            raise ValueError(f'step {step} does not follow [{i - di},{j - dj}]')
        if i > len(source) or j > len(target):
            raise ValueError(f'step {step} is outside the matrix')
        if step.op == Op.MATCH:
            if source[i - 1] != target[j - 1]:
                raise ValueError(f'step {step} copies {source[i - 1]!r} '
                        f'to {target[j - 1]!r}')
            result.append(source[i - 1])
        elif step.op in (Op.INS, Op.SUB):
            result.append(target[j - 1])
    if (i, j) != (len(source), len(target)):
        raise ValueError(f'script ends at [{i},{j}], not '
                f'[{len(source)},{len(target)}]')
    return result
