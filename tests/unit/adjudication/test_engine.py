"""Tests for end-to-end adjudication of a single claim."""

import pytest

from crop_claims.core.exceptions import ClassifierError, PolicyNotFoundError
from crop_claims.schemas.claims import DataSource, DisasterType, Disposition, DispositionReason, FraudRisk
from crop_claims.services.adjudication.citations import LOCALIZED_CALAMITY, MID_SEASON_ADVERSITY, STANDING_CROP_LOSS
from crop_claims.services.adjudication.engine import adjudicate, rules_from_settings
from crop_claims.services.adjudication.payout import PayoutRules
from crop_claims.services.classification.disaster_classifier import failed_assessment


def test_approved_claim_settles_computed_payout(assessment_factory, policy_factory, ground_truth):
    decision = adjudicate(
        assessment_factory(type=DisasterType.PEST, severity=50),
        policy_factory(sum_insured=500_000),
        ground_truth,
    )

    assert decision.disposition == Disposition.APPROVED
    assert decision.reason == DispositionReason.ELIGIBLE
    assert decision.computed_payout == 250_000
    assert decision.settlement_amount == 250_000
    assert decision.citation == STANDING_CROP_LOSS
    assert decision.policy_id == "pol_test"


def test_scenario_d_crop_mismatch_rejected(assessment_factory, policy_factory, ground_truth_factory):
    decision = adjudicate(
        assessment_factory(type=DisasterType.FLOOD, severity=70, is_crop_match=False, detected_crop="Sugarcane"),
        policy_factory(sum_insured=250_000),
        ground_truth_factory(rain=90.0, ndvi=-0.2),
    )

    assert decision.disposition == Disposition.REJECTED
    assert decision.reason == DispositionReason.CROP_MISMATCH
    assert decision.computed_payout == 0
    assert decision.settlement_amount == 0


def test_scenario_e_high_fraud_withholds_settlement(assessment_factory, policy_factory, ground_truth_factory):
    decision = adjudicate(
        assessment_factory(type=DisasterType.DROUGHT, severity=60, fraud_risk=FraudRisk.HIGH),
        policy_factory(sum_insured=250_000),
        ground_truth_factory(rain=3.0, ndvi=0.15),
    )

    assert decision.disposition == Disposition.UNDER_REVIEW
    assert decision.computed_payout == 150_000
    assert decision.settlement_amount == 0
    assert decision.citation == MID_SEASON_ADVERSITY


def test_no_disaster_is_dismissed_without_payout(assessment_factory, policy, ground_truth):
    decision = adjudicate(assessment_factory(type=DisasterType.NONE, severity=45), policy, ground_truth)

    assert decision.disposition == Disposition.DISMISSED
    assert decision.computed_payout == 0
    assert decision.settlement_amount == 0


def test_inconsistencies_escalate_fraud_risk(assessment_factory, policy_factory, ground_truth_factory):
    # Flood with no rain and lush vegetation: two flags take Low to High
    decision = adjudicate(
        assessment_factory(type=DisasterType.FLOOD, severity=90),
        policy_factory(sum_insured=150_000),
        ground_truth_factory(rain=0.5, ndvi=0.75),
    )

    assert decision.reported_fraud_risk == FraudRisk.LOW
    assert decision.effective_fraud_risk == FraudRisk.HIGH
    assert decision.disposition == Disposition.UNDER_REVIEW
    assert decision.computed_payout == 150_000
    assert decision.settlement_amount == 0
    assert decision.citation == LOCALIZED_CALAMITY


def test_escalation_can_be_disabled(assessment_factory, policy_factory, ground_truth_factory):
    decision = adjudicate(
        assessment_factory(type=DisasterType.FLOOD, severity=90),
        policy_factory(sum_insured=150_000),
        ground_truth_factory(rain=0.5, ndvi=0.75),
        escalate_on_inconsistency=False,
    )

    assert not decision.verification.consistent
    assert decision.effective_fraud_risk == FraudRisk.LOW
    assert decision.disposition == Disposition.APPROVED
    assert decision.settlement_amount == 150_000


def test_single_inconsistency_does_not_block_settlement(assessment_factory, policy, ground_truth_factory):
    decision = adjudicate(
        assessment_factory(type=DisasterType.FLOOD, severity=40),
        policy,
        ground_truth_factory(rain=2.0, ndvi=-0.1),
    )

    assert decision.effective_fraud_risk == FraudRisk.MEDIUM
    assert decision.disposition == Disposition.APPROVED
    assert decision.settlement_amount == 100_000


def test_fallback_ground_truth_does_not_escalate(assessment_factory, policy, ground_truth_factory):
    decision = adjudicate(
        assessment_factory(type=DisasterType.FLOOD, severity=40),
        policy,
        ground_truth_factory(rain=0.0, ndvi=0.0, weather_source=DataSource.FALLBACK, satellite_source=DataSource.FALLBACK),
    )

    assert decision.effective_fraud_risk == FraudRisk.LOW
    assert decision.verification.skipped == ["weather", "satellite"]


def test_drought_cap_rule_flows_through(assessment_factory, policy_factory, ground_truth_factory):
    decision = adjudicate(
        assessment_factory(type=DisasterType.DROUGHT, severity=60),
        policy_factory(sum_insured=250_000),
        ground_truth_factory(rain=3.0, ndvi=0.15),
        rules=PayoutRules(drought_on_account_cap_enabled=True),
    )
    assert decision.settlement_amount == 62_500


def test_missing_policy_fails_fast(assessment_factory, ground_truth):
    with pytest.raises(PolicyNotFoundError):
        adjudicate(assessment_factory(), None, ground_truth)


def test_failed_assessment_is_not_adjudicated(policy, ground_truth):
    with pytest.raises(ClassifierError):
        adjudicate(failed_assessment(), policy, ground_truth)


def test_rules_from_settings():
    class StubSettings:
        drought_on_account_cap_enabled = True
        drought_on_account_cap_ratio = 0.3

    rules = rules_from_settings(StubSettings())
    assert rules.drought_on_account_cap_enabled is True
    assert rules.drought_on_account_cap_ratio == 0.3
    assert rules.deductible_threshold == 20
