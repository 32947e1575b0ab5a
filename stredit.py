#!/usr/bin/env python3


"""Prints weighted edit cost matrices and all optimal decision sequences.

Processes a built-in example pair, then every input file given. An input
file holds the source sequence on its first line and the target sequence on
its second.
"""


import argparse
import editcost
import logging
import sys


from typing import List, Optional, Tuple


EXAMPLE = ('aabab', 'babb')
MAX_DISPLAY_LENGTH = 10


class InputError(Exception):
    pass


def read_pair(path: str) -> Tuple[str, str]:
    try:
        with open(path, encoding='utf-8') as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f'cannot read {path}: {e}') from e
    if len(lines) < 2:
        raise InputError(f'{path}: expected 2 lines, found {len(lines)}')
    return lines[0], lines[1]


def pp_script(script: editcost.Script) -> str:
    """Pretty-print a decision sequence
    """
    return '[' + ', '.join(str(s) for s in script) + ']'


def pp_matrix(source: editcost.String, target: editcost.String,
        matrix: editcost.Matrix, precision: int=editcost.PRECISION) -> str:
    """Pretty-print a cost matrix

    Target symbols label the columns, source symbols the rows.
    """
    rows = [
        ['', '', ''] + [str(y) for y in target],
        ['', 'i/j'] + [f'[{j}]' for j in range(len(target) + 1)],
    ]
    for i, row in enumerate(matrix):
        label = str(source[i - 1]) if i > 0 else ''
        rows.append([label, f'[{i}]'] + [f'{c:.{precision}f}' for c in row])
    widths = [max(len(r[k]) for r in rows) for k in range(len(rows[0]))]
    return '\n'.join(
        ' '.join(cell.rjust(w) for cell, w in zip(r, widths)).rstrip()
        for r in rows
    )


def report(source: str, target: str, costs: editcost.Costs,
        max_display_length: int=MAX_DISPLAY_LENGTH) -> None:
    matrix = editcost.matrix(source, target, costs)
    display = len(source) <= max_display_length \
            and len(target) <= max_display_length
    if display:
        print(f'Input Sequences:\nFrom: {source}\nTo: {target}\n')
        print('Matrix:')
        print(pp_matrix(source, target, matrix, costs.precision))
        print()
    else:
        logging.info('Not displaying matrix and sequences for inputs of '
                'length %d and %d', len(source), len(target))
    cost = editcost.distance(matrix)
    print(f'Final cost(n,m) = cost({len(source)},{len(target)}) = '
            f'{cost:.{costs.precision}f}\n')
    if display:
        print('Decision Sequences:')
        count = 0
        for script in editcost.scripts(source, target, matrix, costs):
            print(pp_script(script))
            count += 1
        print()
        logging.info('%d decision sequences', count)


def main(argv: Optional[List[str]]=None) -> int:
    arg_parser = argparse.ArgumentParser(description=__doc__)
    arg_parser.add_argument('paths', nargs='*',
            help='input files, source on the first line, target on the second')
    arg_parser.add_argument('--insert-cost', type=float,
            default=editcost.INS_COST, help='cost of an insertion')
    arg_parser.add_argument('--delete-cost', type=float,
            default=editcost.DEL_COST, help='cost of a deletion')
    arg_parser.add_argument('--change-cost', type=float,
            default=editcost.CHANGE_COST,
            help='cost of changing a symbol into a different one')
    arg_parser.add_argument('--precision', type=int,
            default=editcost.PRECISION,
            help='decimal places of the costs; equal at this precision means tied')
    arg_parser.add_argument('--max-display-length', type=int,
            default=MAX_DISPLAY_LENGTH,
            help='only print matrices and sequences for inputs up to this length')
    arg_parser.add_argument('--no-example', action='store_true',
            help='skip the built-in example pair')
    arg_parser.add_argument('-v', '--verbose', action='count', default=0,
            help='Verbosity. Give once for progress messages, twice for debugging.')
    args = arg_parser.parse_args(argv)
    if args.verbose == 1:
        logging.basicConfig(level=logging.INFO)
    elif args.verbose >= 2:
        logging.basicConfig(level=logging.DEBUG)
    try:
        costs = editcost.Costs(args.insert_cost, args.delete_cost,
                args.change_cost, args.precision)
    except ValueError as e:
        arg_parser.error(str(e))
    if not args.no_example:
        print('Example:')
        report(*EXAMPLE, costs, args.max_display_length)
    if args.paths:
        print('Inputs from files:')
    failures = 0
    for path in args.paths:
        print(f'{path}:')
        try:
            source, target = read_pair(path)
        except InputError as e:
            logging.error('%s', e)
            failures += 1
            continue
        logging.info('Processing %s', path)
        report(source, target, costs, args.max_display_length)
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
