"""Playing time reports for the Soccer Substitution Planner."""

from __future__ import annotations

import csv
import datetime as dt
import io
import statistics
from typing import List, Optional

from ..models import Evaluation, PlanState, TimelineEvent
from ..utils import now_ts
from ..utils.time_utils import fmt_minutes
from .evaluation_service import evaluate
from .timeline_service import build_timeline


class PlanReportService:
    """
    Generate CSV and plain-text reports for a plan.
    """

    def __init__(self, plan_state: PlanState) -> None:
        self.plan_state = plan_state

    def _evaluate(self) -> Evaluation:
        state = self.plan_state
        return evaluate(state.grid, state.config, state.players)

    def generate_report_csv(self, evaluation: Optional[Evaluation] = None) -> str:
        """Return a CSV document describing planned playing time.

        Args:
            evaluation: Optional pre-computed :class:`Evaluation`. When omitted
                the plan is evaluated afresh.

        Returns:
            CSV formatted string containing summary information followed by a
            table of player level totals.

        Raises:
            ValueError: If there are no players to include in the report.
        """
        evaluation = evaluation or self._evaluate()
        if evaluation.player_count == 0:
            raise ValueError("Cannot export a report without any players")

        config = self.plan_state.config
        totals = [aggregate.total_minutes for aggregate in evaluation.player_aggregates]

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")

        generated_dt = dt.datetime.fromtimestamp(now_ts())
        writer.writerow(["Substitution Plan Report"])
        writer.writerow(["Title", self.plan_state.title])
        writer.writerow(["Generated", generated_dt.isoformat(timespec="seconds")])
        writer.writerow(["Formation", config.formation_id])
        writer.writerow(["Half Duration (min)", fmt_minutes(config.half_duration_minutes)])
        writer.writerow(["Slot Interval (min)", fmt_minutes(config.slot_interval_minutes)])
        writer.writerow(["Minimum Per Player (min)", fmt_minutes(config.min_minutes_per_player)])
        writer.writerow(["Roster Size", evaluation.player_count])
        writer.writerow(["Average Minutes", round(statistics.mean(totals), 2)])
        writer.writerow(["Unassigned Cells", evaluation.warning_count])
        writer.writerow(["Double-Booked Cells", evaluation.error_count])
        writer.writerow(["Players Under Minimum", len(evaluation.under_minimum_players)])
        writer.writerow([])

        writer.writerow(["Name", "Minutes", "Minimum", "Status", "Positions"])
        for aggregate in evaluation.player_aggregates:
            writer.writerow(
                [
                    aggregate.name,
                    fmt_minutes(aggregate.total_minutes),
                    fmt_minutes(config.min_minutes_per_player),
                    "under" if aggregate.under_minimum else "ok",
                    " ".join(aggregate.positions_played),
                ]
            )

        csv_text = buffer.getvalue()
        buffer.close()
        return csv_text

    def generate_timeline_text(self, events: Optional[List[TimelineEvent]] = None) -> str:
        """Render the substitution timeline as plain text, one event per line."""
        if events is None:
            state = self.plan_state
            events = build_timeline(state.grid, state.config, self._evaluate())
        lines = []
        if self.plan_state.title:
            lines.append(self.plan_state.title)
            lines.append("")
        lines.extend(event.text for event in events)
        return "\n".join(lines) + "\n"
