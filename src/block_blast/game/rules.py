from __future__ import annotations

from dataclasses import dataclass

from .grid import CompletedLines


@dataclass
class ScoringRules:
    points_per_cell: int = 10
    points_per_line: int = 50

    def placement_score(self, cells_placed: int) -> int:
        return max(0, cells_placed) * self.points_per_cell

    def score_for_lines(self, lines: CompletedLines | int) -> int:
        # Rows and columns count independently, so a cross scores two lines.
        count = lines.count if isinstance(lines, CompletedLines) else int(lines)
        if count <= 0:
            return 0
        return count * self.points_per_line
