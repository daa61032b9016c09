from datetime import date
from decimal import Decimal

import pytest

from ledger_recon.config import MatchingConfig
from ledger_recon.matching.engine import BankReconciliationEngine, TransactionMatcher
from tests.conftest import make_entry


@pytest.fixture
def matcher():
    return TransactionMatcher()


class TestAmountGate:
    def test_boundary_is_accepted(self, matcher):
        assert matcher.is_eligible(make_entry(1, "a", "1000.00"), make_entry(1, "a", "1001.00"))

    def test_just_over_boundary_is_rejected(self, matcher):
        assert not matcher.is_eligible(
            make_entry(1, "a", "1000.00"), make_entry(1, "a", "1001.01")
        )

    def test_relative_tolerance_applies_to_small_amounts(self, matcher):
        # min(1, 100 * 0.001) = 0.1
        assert matcher.is_eligible(make_entry(1, "a", "100"), make_entry(1, "a", "100.10"))
        assert not matcher.is_eligible(make_entry(1, "a", "100"), make_entry(1, "a", "100.20"))

    def test_tolerance_uses_source_amount(self, matcher):
        # 100.05 * 0.001 = 0.10005 on one side, 99.95 * 0.001 = 0.09995 on the other
        assert matcher.is_eligible(make_entry(1, "a", "100.05"), make_entry(1, "a", "99.95"))
        assert not matcher.is_eligible(make_entry(1, "a", "99.95"), make_entry(1, "a", "100.05"))

    def test_ineligible_pair_is_not_scored(self, matcher):
        assert matcher.score(make_entry(1, "a", "10"), make_entry(1, "a", "20")) is None

    def test_configured_tolerance(self):
        matcher = TransactionMatcher(MatchingConfig(amount_tolerance=5, amount_tolerance_ratio=0.01))
        assert matcher.is_eligible(make_entry(1, "a", "1000"), make_entry(1, "a", "1005"))


class TestScore:
    @pytest.mark.parametrize(
        "days, expected",
        [(0, 1.0), (1, 6 / 7), (3, 4 / 7), (7, 0.0), (10, 0.0)],
    )
    def test_date_proximity(self, matcher, days, expected):
        a = date(2024, 1, 1)
        b = date(2024, 1, 1 + days)
        assert matcher.date_proximity(a, b) == pytest.approx(expected)
        assert matcher.date_proximity(b, a) == pytest.approx(expected)

    def test_missing_date_gives_no_proximity(self, matcher):
        assert matcher.date_proximity(None, date(2024, 1, 1)) == 0.0

    def test_identical_entries_score_three(self, matcher):
        entry = make_entry(5, "Acme Co", 5000)
        assert matcher.score(entry, make_entry(5, "Acme Co", 5000)) == pytest.approx(3.0)

    def test_score_components(self, matcher):
        score = matcher.score(make_entry(5, "Acme Co", 5000), make_entry(6, "ACME COMPANY", 5000))
        assert score == pytest.approx(1 + 6 / 7 + 0.9)


class TestMatch:
    def test_end_to_end_scenario(self, matcher):
        result = matcher.match(
            [make_entry(5, "Acme Co", 5000)], [make_entry(6, "ACME COMPANY", 5000)]
        )

        assert result.unmatched_source == []
        assert result.unmatched_target == []
        assert result.matches[0].score == pytest.approx(1 + 6 / 7 + 0.9)

    def test_best_score_wins(self, matcher):
        sources = [make_entry(5, "Acme Co", 100)]
        targets = [make_entry(9, "Someone Else", 100), make_entry(5, "Acme Co", 100)]

        result = matcher.match(sources, targets)

        assert [(m.source_index, m.target_index) for m in result.matches] == [(0, 1)]
        assert result.unmatched_target == [targets[0]]

    def test_greedy_assignment_is_not_optimal(self, matcher):
        # L0 fits T0 perfectly and T1 loosely; L1 only fits T0.
        # Greedy takes L0-T0 first, leaving L1 and T1 unmatched even
        # though L0-T1 plus L1-T0 would match everything.
        l0 = make_entry(5, "Alpha Stores", "100.00")
        l1 = make_entry(5, "Beta Stores", "100.05")
        t0 = make_entry(5, "Alpha Stores", "100.00")
        t1 = make_entry(6, "Gamma", "99.92")

        assert matcher.is_eligible(l0, t1)
        assert matcher.is_eligible(l1, t0)
        assert not matcher.is_eligible(l1, t1)

        result = matcher.match([l0, l1], [t0, t1])

        assert [(m.source_index, m.target_index) for m in result.matches] == [(0, 0)]
        assert result.unmatched_source == [l1]
        assert result.unmatched_target == [t1]

    def test_ties_keep_generation_order(self, matcher):
        sources = [make_entry(5, "Acme", 100), make_entry(5, "Acme", 100)]
        targets = [make_entry(5, "Acme", 100)]

        result = matcher.match(sources, targets)

        assert result.matches[0].source_index == 0
        assert result.unmatched_source == [sources[1]]

    def test_each_index_used_at_most_once(self, matcher):
        sources = [make_entry(d, "Vendor", 250) for d in (1, 2, 3, 4, 5)]
        targets = [make_entry(d, "VENDOR", 250) for d in (2, 3, 9)]

        result = matcher.match(sources, targets)

        source_indices = [m.source_index for m in result.matches]
        target_indices = [m.target_index for m in result.matches]
        assert len(source_indices) == len(set(source_indices))
        assert len(target_indices) == len(set(target_indices))
        assert len(result.matches) == 3
        assert len(result.unmatched_source) == 2
        assert result.unmatched_target == []

    def test_entry_without_date_still_matches(self, matcher):
        result = matcher.match([make_entry(None, "Vendor", 40)], [make_entry(3, "Vendor", 40)])
        assert result.matches[0].score == pytest.approx(2.0)

    def test_empty_inputs(self, matcher):
        result = matcher.match([], [make_entry(1, "a", 1)])
        assert result.matches == []
        assert len(result.unmatched_target) == 1

    def test_match_is_repeatable(self, matcher):
        sources = [make_entry(d, f"Party {d % 3}", 100 + d % 2) for d in range(1, 20)]
        targets = [make_entry(d, f"PARTY {d % 4}", 100 + d % 2) for d in range(3, 25)]

        first = matcher.match(sources, targets)
        second = matcher.match(sources, targets)
        assert first.matches == second.matches


class TestBankReconciliationEngine:
    def test_runs_are_independent(self):
        engine = BankReconciliationEngine()

        # Same amount on every list: debits may only pair with deposits
        # and credits with withdrawals.
        debit = make_entry(5, "Acme", 500)
        credit = make_entry(5, "Acme", 500)
        withdrawal = make_entry(5, "Acme", 500)

        result = engine.reconcile([debit], [credit], [withdrawal], [])

        assert result.unmatched_ledger_debits == [debit]
        assert result.unmatched_ledger_credits == []
        assert result.unmatched_bank_withdrawals == []
        assert result.unmatched_bank_deposits == []

    def test_summary(self):
        engine = BankReconciliationEngine()
        debits = [make_entry(5, "Acme Co", 5000), make_entry(7, "Orphan", 10)]
        credits = [make_entry(8, "Office Rent", 12000)]
        withdrawals = [make_entry(8, "RENT JAN", 12000), make_entry(10, "BANK CHARGES", 118)]
        deposits = [make_entry(6, "ACME COMPANY", 5000)]

        summary = engine.reconcile(debits, credits, withdrawals, deposits).summary

        assert summary.ledger_debit_count == 2
        assert summary.ledger_debit_total == Decimal("5010")
        assert summary.bank_withdrawal_total == Decimal("12118")
        assert summary.debit_deposit_matches == 1
        assert summary.credit_withdrawal_matches == 1
        assert summary.matched_count == 2
        assert summary.unmatched_ledger_debits == 1
        assert summary.unmatched_bank_withdrawals == 1
        assert summary.unmatched_count == 2

    def test_injected_logger_receives_unmatched_listing(self, caplog):
        import logging

        custom = logging.getLogger("tests.recon")
        engine = BankReconciliationEngine(logger=custom)

        with caplog.at_level(logging.DEBUG, logger="tests.recon"):
            engine.reconcile([make_entry(1, "Lonely", 5)], [], [], [])

        assert any("Lonely" in r.getMessage() for r in caplog.records)
        assert all(r.name == "tests.recon" for r in caplog.records)
