import pytest

from rideshift.database import AsyncSessionLocal
from rideshift.models.proposal import ProposalStatus
from rideshift.services.governance_service import GovernanceService


def _vote(client, proposal_id, action, voter_id="voter-1"):
    return client.patch(
        "/api/governance",
        json={"proposal_id": proposal_id, "voter_id": voter_id, "action": action},
    )


def _set_status(client, proposal_id, status):
    """Move a proposal out of pending directly in the store"""

    async def _update():
        async with AsyncSessionLocal() as session:
            proposal = await GovernanceService().get_proposal(proposal_id, session)
            proposal.status = status
            await session.commit()

    client.portal.call(_update)


def test_new_proposal_starts_pending_with_zero_votes(make_proposal):
    proposal = make_proposal(0.12)
    assert proposal["proposal_id"].startswith("prop_")
    assert proposal["status"] == "pending"
    assert proposal["vote_count"] == 0
    assert proposal["new_rate"] == 0.12


@pytest.mark.parametrize("rate", [0.05, 0.25])
def test_boundary_rates_are_accepted(client, rate):
    resp = client.post("/api/governance", json={"proposer_id": "p", "new_rate": rate})
    assert resp.status_code == 201
    assert resp.json()["new_rate"] == rate


@pytest.mark.parametrize("rate", [0.0, 0.0499, 0.2501, 0.5, -0.1])
def test_rates_outside_band_are_rejected(client, rate):
    resp = client.post("/api/governance", json={"proposer_id": "p", "new_rate": rate})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Commission rate must be between 5% and 25%"}
    assert client.get("/api/governance").json() == []


@pytest.mark.parametrize("raw_rate", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_rates_are_rejected(client, raw_rate):
    resp = client.post(
        "/api/governance",
        content=f'{{"proposer_id": "p", "new_rate": {raw_rate}}}',
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Commission rate must be between 5% and 25%"}
    assert client.get("/api/governance").json() == []


def test_rate_must_be_a_number(client):
    resp = client.post("/api/governance", json={"proposer_id": "p", "new_rate": "0.1"})
    assert resp.status_code == 400
    assert "new_rate" in resp.json()["error"]


def test_oppose_drives_tally_negative(client, make_proposal):
    proposal = make_proposal()
    resp = _vote(client, proposal["proposal_id"], "oppose")
    assert resp.status_code == 200
    assert resp.json()["vote_count"] == -1

    resp = _vote(client, proposal["proposal_id"], "oppose")
    assert resp.json()["vote_count"] == -2


def test_support_and_oppose_share_one_tally(client, make_proposal):
    proposal = make_proposal()
    for action in ["support", "support", "support", "oppose"]:
        _vote(client, proposal["proposal_id"], action)

    listed = client.get("/api/governance").json()
    assert listed[0]["vote_count"] == 2
    # Tally never resolves the proposal
    assert listed[0]["status"] == "pending"


def test_vote_requires_voter(client, make_proposal):
    proposal = make_proposal()
    resp = client.patch(
        "/api/governance",
        json={"proposal_id": proposal["proposal_id"], "action": "support"},
    )
    assert resp.status_code == 400
    assert "voter_id" in resp.json()["error"]


def test_invalid_vote_action(client, make_proposal):
    proposal = make_proposal()
    resp = _vote(client, proposal["proposal_id"], "abstain")
    assert resp.status_code == 400
    assert resp.json() == {"error": 'Invalid action. Use "support" or "oppose"'}


def test_vote_on_unknown_proposal(client):
    assert _vote(client, "prop_missing", "support").status_code == 404


@pytest.mark.parametrize("status", [ProposalStatus.APPROVED, ProposalStatus.REJECTED])
def test_vote_only_while_pending(client, make_proposal, status):
    proposal = make_proposal()
    _vote(client, proposal["proposal_id"], "support")
    _set_status(client, proposal["proposal_id"], status)

    resp = _vote(client, proposal["proposal_id"], "support")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Can only vote on pending proposals"}

    listed = client.get("/api/governance", params={"status": status.value}).json()
    assert listed[0]["vote_count"] == 1


def test_filter_by_proposer(client, make_proposal):
    make_proposal(proposer_id="alice")
    make_proposal(proposer_id="bob")

    listed = client.get("/api/governance", params={"proposer_id": "bob"}).json()
    assert [p["proposer_id"] for p in listed] == ["bob"]
    assert client.get("/api/governance", params={"status": "approved"}).json() == []


def test_update_rate_is_range_checked(client, make_proposal):
    proposal = make_proposal(0.12)

    ok = client.put(
        "/api/governance", json={"proposal_id": proposal["proposal_id"], "new_rate": 0.2}
    )
    assert ok.status_code == 200
    assert ok.json()["new_rate"] == 0.2

    bad = client.put(
        "/api/governance", json={"proposal_id": proposal["proposal_id"], "new_rate": 0.3}
    )
    assert bad.status_code == 400


def test_update_cannot_set_vote_count(client, make_proposal):
    proposal = make_proposal()
    resp = client.put(
        "/api/governance",
        json={"proposal_id": proposal["proposal_id"], "vote_count": 1000},
    )
    assert resp.status_code == 400
