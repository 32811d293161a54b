"""Tests for AI bill authoring."""

from py_polisim.core.alea_prng import AleaPRNG
from py_polisim.core.bill_authoring import (
    council_vote_on_bill,
    decide_and_author_ai_bill,
    finances_are_dire,
)
from py_polisim.core.models import Bill, BillPolicy
from py_polisim.data.policies import CITY_POLICIES, CITY_POLICIES_BY_ID


def _law_and_order(politician_factory):
    return politician_factory(
        "council_hawk",
        ideology_scores={"social_traditionalism": 8.0, "authority_structure": 10.0},
    )


class TestFinances:

    def test_deficit_is_dire(self, budget_factory):
        assert finances_are_dire(budget_factory(income=100, expenses={"police_department": 200}))

    def test_heavy_debt_is_dire(self, budget_factory):
        assert finances_are_dire(budget_factory(income=1_000_000, debt=600_000))

    def test_healthy_budget(self, budget_factory):
        assert not finances_are_dire(budget_factory())
        assert not finances_are_dire(None)


class TestDecideAndAuthor:

    def test_aligned_member_drafts_bill(self, politician_factory, campaign_factory):
        campaign = campaign_factory()
        bill = decide_and_author_ai_bill(_law_and_order(politician_factory), campaign, AleaPRNG("bill"))

        assert bill is not None
        assert bill.proposer_id == "council_hawk"
        assert bill.status == "proposed"
        assert 1 <= len(bill.policies) <= 3
        assert all(pid in CITY_POLICIES_BY_ID for pid in bill.policy_ids)
        assert bill.proposed_date == campaign.current_date

    def test_parameters_within_range(self, politician_factory, campaign_factory):
        campaign = campaign_factory()
        for seed in range(20):
            bill = decide_and_author_ai_bill(
                _law_and_order(politician_factory), campaign, AleaPRNG(f"params-{seed}")
            )
            for policy in bill.policies:
                param = CITY_POLICIES_BY_ID[policy.policy_id]["parameter"]
                if param is None:
                    assert policy.chosen_parameters == {}
                    continue
                value = policy.chosen_parameters[param["key"]]
                assert param["min"] <= value <= param["max"]

    def test_same_tick_bills_do_not_repeat_policies(self, politician_factory, campaign_factory):
        campaign = campaign_factory()
        prng = AleaPRNG("tick")
        first = decide_and_author_ai_bill(_law_and_order(politician_factory), campaign, prng)
        second = decide_and_author_ai_bill(_law_and_order(politician_factory), campaign, prng, [first])

        if second is not None:
            assert not set(first.policy_ids) & set(second.policy_ids)

    def test_nothing_left_to_propose(self, politician_factory, campaign_factory):
        pending = Bill(
            id="bill_all",
            name="Everything Act",
            proposer_id="someone",
            proposer_name="Someone",
            policies=[BillPolicy(policy_id=p["id"]) for p in CITY_POLICIES],
        )
        campaign = campaign_factory().model_copy(update={"proposed_bills": [pending]})
        assert decide_and_author_ai_bill(_law_and_order(politician_factory), campaign, AleaPRNG("x")) is None

    def test_decided_bills_free_their_policies(self, politician_factory, campaign_factory):
        for status in ("passed", "failed"):
            decided = Bill(
                id="bill_all",
                name="Everything Act",
                proposer_id="someone",
                proposer_name="Someone",
                policies=[BillPolicy(policy_id=p["id"]) for p in CITY_POLICIES],
                status=status,
            )
            campaign = campaign_factory().model_copy(update={"proposed_bills": [decided]})
            bill = decide_and_author_ai_bill(_law_and_order(politician_factory), campaign, AleaPRNG("again"))
            assert bill is not None

    def test_indifferent_member_stays_quiet(self, politician_factory, campaign_factory, city_factory):
        city = city_factory()
        city = city.model_copy(update={"stats": city.stats.model_copy(update={"main_issues": []})})
        campaign = campaign_factory(city=city)
        politician = politician_factory("council_neutral")
        assert decide_and_author_ai_bill(politician, campaign, AleaPRNG("quiet")) is None

    def test_dire_finances_pick_minimum_parameters(self, politician_factory, campaign_factory, city_factory, budget_factory):
        city = city_factory(budget=budget_factory(income=100, expenses={"police_department": 5000}))
        bill = decide_and_author_ai_bill(
            _law_and_order(politician_factory), campaign_factory(city=city), AleaPRNG("dire")
        )
        assert bill is not None
        for policy in bill.policies:
            param = CITY_POLICIES_BY_ID[policy.policy_id]["parameter"]
            if param is not None:
                assert policy.chosen_parameters[param["key"]] == param["min"]


class TestCouncilVote:

    def setup_method(self):
        self.bill = Bill(
            id="bill_safety",
            name="Public Safety Initiative Act",
            proposer_id="council_hawk",
            proposer_name="Hawk",
            policies=[BillPolicy(policy_id="public_safety")],
        )

    def test_aligned_council_votes_yes(self, politician_factory):
        members = [_law_and_order(politician_factory)] + [
            politician_factory(
                f"council_{i}",
                ideology_scores={"social_traditionalism": 6.0, "authority_structure": 7.0},
            )
            for i in range(4)
        ]
        assert council_vote_on_bill(self.bill, members, AleaPRNG("aye")) == (5, 0)

    def test_opposed_council_votes_no(self, politician_factory):
        members = [
            politician_factory(
                f"council_{i}",
                ideology_scores={"social_traditionalism": -6.0, "authority_structure": -7.0},
            )
            for i in range(4)
        ]
        assert council_vote_on_bill(self.bill, members, AleaPRNG("nay")) == (0, 4)

    def test_proposer_always_supports(self, politician_factory):
        proposer = politician_factory(
            "council_hawk",
            ideology_scores={"social_traditionalism": -6.0, "authority_structure": -7.0},
        )
        assert council_vote_on_bill(self.bill, [proposer], AleaPRNG("own")) == (1, 0)

    def test_votes_cover_whole_council(self, politician_factory):
        members = [politician_factory(f"council_{i}") for i in range(7)]
        yes, no = council_vote_on_bill(self.bill, members, AleaPRNG("split"))
        assert yes + no == 7
