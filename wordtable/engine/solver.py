"""CP-SAT joint word placement using OR-Tools.

Placing words one at a time can paint itself into a corner on a small grid:
an early word may block every spot a later word needed. This solver places a
whole set of words at once, keeping any letters already on the grid fixed.
"""

from __future__ import annotations

import random
from typing import Dict, List, Mapping, Optional, Tuple

from ortools.sat.python import cp_model

from ..core.models import GridPosition
from ..utils.logger import get_logger
from .placement import Candidate, iter_candidates

LOGGER = get_logger(__name__)


def solve_placements(
    grid_size: int,
    words: Mapping[int, str],
    fixed_letters: Optional[Mapping[GridPosition, str]] = None,
    seed: Optional[int] = None,
    timeout: float = 10.0,
) -> Optional[Dict[int, Candidate]]:
    """Find one placement per word so that all words agree where they cross.

    Args:
        grid_size: Side length of the square grid.
        words: Word row index -> word (upper-case).
        fixed_letters: Letters already committed on the grid.
        seed: Seeds candidate ordering and the solver, for reproducible layouts.
        timeout: Solver time limit in seconds.

    Returns:
        Word row index -> ``(start_col, start_row, d_col, d_row)``, or None if
        no joint placement exists (or none was found in time).
    """
    if not words:
        return {}

    fixed = dict(fixed_letters or {})
    rng = random.Random(seed)
    model = cp_model.CpModel()

    alphabet = sorted({letter for word in words.values() for letter in word} | set(fixed.values()))
    codes = {letter: index for index, letter in enumerate(alphabet)}

    # ------------------------------------------------------------------
    # Step 1: One boolean per candidate placement, exactly one per word
    # ------------------------------------------------------------------
    cell_vars: Dict[GridPosition, cp_model.IntVar] = {}
    choices: Dict[int, List[Tuple[Candidate, cp_model.IntVar]]] = {}

    for row_index, word in words.items():
        candidates = list(iter_candidates(grid_size, fixed, word))
        if not candidates:
            LOGGER.debug("CP-SAT: '%s' has no candidate on %sx%s grid", word, grid_size, grid_size)
            return None
        rng.shuffle(candidates)

        literals: List[Tuple[Candidate, cp_model.IntVar]] = []
        for candidate in candidates:
            start_col, start_row, d_col, d_row = candidate
            chosen = model.new_bool_var(f"w{row_index}_{start_col}_{start_row}_{d_col}_{d_row}")

            # ------------------------------------------------------------------
            # Step 2: A chosen candidate pins the letter of every free cell it covers
            # ------------------------------------------------------------------
            for index, letter in enumerate(word):
                position = GridPosition(start_col + index * d_col, start_row + index * d_row)
                if position in fixed:
                    continue  # candidate already agrees with the fixed letter
                var = cell_vars.get(position)
                if var is None:
                    var = model.new_int_var(0, len(alphabet) - 1, f"L_{position.col}_{position.row}")
                    cell_vars[position] = var
                model.add(var == codes[letter]).only_enforce_if(chosen)
            literals.append((candidate, chosen))

        model.add_exactly_one([chosen for _, chosen in literals])
        choices[row_index] = literals

    # ------------------------------------------------------------------
    # Step 3: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 1
    if seed is not None:
        solver.parameters.random_seed = seed

    LOGGER.info(
        "CP-SAT: %d words, %d candidates, %d cell vars, solving (timeout=%0.1fs)...",
        len(words),
        sum(len(literals) for literals in choices.values()),
        len(cell_vars),
        timeout,
    )

    status = solver.solve(model)

    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no joint placement found (status=%s)", solver.status_name(status))
        return None

    LOGGER.info("CP-SAT: joint placement found in %.2fs", solver.wall_time)

    # ------------------------------------------------------------------
    # Step 4: Extract solution
    # ------------------------------------------------------------------
    result: Dict[int, Candidate] = {}
    for row_index, literals in choices.items():
        for candidate, chosen in literals:
            if solver.boolean_value(chosen):
                result[row_index] = candidate
                break
    return result
