"""Tests for survey total checks."""

from aggregate_ranker.audit import TotalCorrection, audit_survey_totals
from aggregate_ranker.ranking import assign_ranks
from aggregate_ranker.scoring import score_pairwise
from aggregate_ranker.table import extract_poll_table
from conftest import make_grid


def _audit(grid, has_aggregate=False):
    table = extract_poll_table(grid, has_aggregate=has_aggregate)
    assign_ranks(score_pairwise(table))
    return table, audit_survey_totals(table, table.subjects)


class TestAuditSurveyTotals:

    def test_correct_totals_no_poll_corrections(self, three_in_order) -> None:
        _, audit = _audit(three_in_order)
        assert audit.totals == [("Poll 1", 3), ("Aggr.", 3)]
        # The aggregate column is new, so its total is always reported
        assert len(audit.corrections) == 1
        assert audit.corrections[0].is_aggregate
        assert audit.corrections[0].message == 'Total in survey for "Aggr." (aggregate) is 3.'

    def test_wrong_total(self) -> None:
        grid = make_grid({"P1": ["1", "—", "2"], "P2": ["1", "2", "3"]}, totals=["3", "3"])
        _, audit = _audit(grid)
        poll_corrections = [c for c in audit.corrections if not c.is_aggregate]
        assert poll_corrections == [TotalCorrection("P1", 3, 2, False)]
        assert poll_corrections[0].message == 'Total in survey for poll "P1" is incorrect; should be 2.'

    def test_missing_total(self) -> None:
        grid = make_grid({"P1": ["1", "2"]}, totals=["forty"])
        _, audit = _audit(grid)
        assert audit.corrections[0] == TotalCorrection("P1", None, 2, False)

    def test_existing_aggregate_checked(self) -> None:
        grid = make_grid(
            {"P1": ["1", "2", "—"]},
            totals=["2"],
            aggregate=["01", "02", ""],
            aggregate_total="2",
        )
        _, audit = _audit(grid, has_aggregate=None)
        assert audit.corrections == []
        assert audit.aggregate_total == 2

    def test_existing_aggregate_wrong(self) -> None:
        grid = make_grid({"P1": ["1", "2", "3"]}, totals=["3"], aggregate=["", "", ""], aggregate_total="2")
        _, audit = _audit(grid, has_aggregate=None)
        assert audit.corrections == [TotalCorrection("Aggr.", 2, 3, True)]
        assert "incorrect; should be 3" in audit.corrections[0].message

    def test_aggregate_counts_scored_subjects(self) -> None:
        # Charlie is only ever ranked alone, so has no comparisons
        grid = make_grid({"P1": ["1", "2", "—"], "P2": ["—", "—", "1"]}, totals=["2", "1"])
        table, audit = _audit(grid)
        assert audit.totals[-1] == ("Aggr.", 2)
        assert table.subjects[2].unranked

    def test_table_not_modified(self) -> None:
        grid = make_grid({"P1": ["1", "2"]}, totals=["5"])
        table, _ = _audit(grid)
        assert table.polls[0].declared_total == 5

    def test_corrections_logged(self, caplog) -> None:
        grid = make_grid({"P1": ["1", "2"]}, totals=["5"])
        with caplog.at_level("WARNING", logger="aggregate_ranker.audit"):
            _audit(grid)
        assert 'poll "P1" is incorrect; should be 2' in caplog.text

    def test_existing_aggregate_blank_total(self) -> None:
        grid = make_grid({"P1": ["1", "2"]}, totals=["2"], aggregate=["", ""], aggregate_total="")
        _, audit = _audit(grid, has_aggregate=None)
        assert audit.corrections == [TotalCorrection("Aggr.", None, 2, True)]
        assert not audit.corrections[0].new_aggregate
        assert audit.corrections[0].message == 'Total in survey for poll "Aggr." is incorrect; should be 2.'

    def test_new_aggregate_notice(self) -> None:
        grid = make_grid({"P1": ["1", "2"]}, totals=["2"])
        _, audit = _audit(grid)
        assert audit.corrections == [TotalCorrection("Aggr.", None, 2, True, new_aggregate=True)]
