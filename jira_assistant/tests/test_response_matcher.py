"""
Unit tests for the response matcher

Tests:
- Key extraction order and deduplication
- Explanation extraction
- Join back to fetched tickets (unknown keys dropped)
- Empty / key-free replies
"""
import pytest

from jira_assistant.models.schemas import AnnotatedTicket, Ticket
from jira_assistant.services.response_matcher import (
    extract_explanation,
    extract_ticket_keys,
    match_response,
)


class TestExtractTicketKeys:
    """Test key scanning"""

    def test_order_of_first_mention(self):
        """Keys come back in order of first appearance"""
        text = "PROJ-5 first, then PROJ-9, then PROJ-5 again"
        assert extract_ticket_keys(text) == ["PROJ-5", "PROJ-9"]

    def test_keys_inside_markdown(self):
        """Keys wrapped in markdown or punctuation are still found"""
        text = "1. **PROJ-7**: relevant\n- (ABC-12) also relevant"
        assert extract_ticket_keys(text) == ["PROJ-7", "ABC-12"]

    def test_lowercase_is_not_a_key(self):
        """The pattern is uppercase-only"""
        assert extract_ticket_keys("proj-1 looks like a key but is not") == []

    @pytest.mark.parametrize("text", ["", None, "No tickets match the query."])
    def test_no_keys(self, text):
        """Empty, missing or key-free text yields no keys"""
        assert extract_ticket_keys(text) == []


class TestExtractExplanation:
    """Test explanation lookup"""

    def test_line_after_key_line(self):
        """The explanation is the next line, stripped"""
        text = "PROJ-1 is relevant\n   Because it matches.  \nPROJ-2 also"
        assert extract_explanation(text, "PROJ-1") == "Because it matches."

    def test_key_match_is_case_insensitive(self):
        """A line starting with the key in another case still counts"""
        text = "proj-1 - login bug\nIt mentions login failures."
        assert extract_explanation(text, "PROJ-1") == "It mentions login failures."

    def test_leading_whitespace_allowed(self):
        text = "  PROJ-1\n  Reason here"
        assert extract_explanation(text, "PROJ-1") == "Reason here"

    def test_key_does_not_claim_longer_key_line(self):
        """PROJ-1 must not pick up the explanation of PROJ-10"""
        text = "PROJ-10 billing\nTypo reason\nPROJ-1 login\nLogin reason"
        assert extract_explanation(text, "PROJ-1") == "Login reason"
        assert extract_explanation(text, "PROJ-10") == "Typo reason"

    def test_key_on_last_line(self):
        """No following line means no explanation"""
        assert extract_explanation("Intro\nPROJ-1", "PROJ-1") == ""

    def test_blank_following_line(self):
        """A blank following line gives an empty explanation"""
        assert extract_explanation("PROJ-1 login\n\nLater text", "PROJ-1") == ""

    def test_key_not_at_line_start(self):
        """Mentions in the middle of a line are not explanation anchors"""
        text = "Matches: PROJ-1 and PROJ-2\nSomething"
        assert extract_explanation(text, "PROJ-1") == ""

    def test_keys_listed_before_explanations(self):
        """Keys listed first, explanations after: the next line is another key"""
        text = "PROJ-1\nPROJ-2\n\nBoth mention login."
        assert extract_explanation(text, "PROJ-1") == "PROJ-2"
        assert extract_explanation(text, "PROJ-2") == ""


class TestMatchResponse:
    """Test joining the reply back to the fetched tickets"""

    def test_end_to_end_scenario(self):
        """Known key annotated, unknown key dropped, no overflow onto PROJ-2"""
        tickets = [Ticket(key="PROJ-1", summary="A"), Ticket(key="PROJ-2", summary="B")]
        reply = "PROJ-1 is relevant\nBecause it matches.\nPROJ-3 is not in list\n"

        results = match_response(reply, tickets)

        assert len(results) == 1
        assert isinstance(results[0], AnnotatedTicket)
        assert results[0].key == "PROJ-1"
        assert results[0].summary == "A"
        assert results[0].ai_explanation == "Because it matches."

    def test_dedup_and_order(self):
        """PROJ-5 twice and PROJ-9 once yields [PROJ-5, PROJ-9]"""
        tickets = [Ticket(key="PROJ-9", summary="nine"), Ticket(key="PROJ-5", summary="five")]
        reply = "PROJ-5 first\nreason five\nPROJ-9 second\nreason nine\nsee PROJ-5 above"

        results = match_response(reply, tickets)

        assert [r.key for r in results] == ["PROJ-5", "PROJ-9"]
        assert [r.ai_explanation for r in results] == ["reason five", "reason nine"]

    def test_unknown_key_dropped(self, sample_tickets):
        """A key that was never fetched produces nothing and no error"""
        assert match_response("PROJ-999 looks relevant\nbut is unknown", sample_tickets) == []

    def test_empty_reply(self, sample_tickets):
        assert match_response("", sample_tickets) == []

    def test_no_tickets(self):
        assert match_response("PROJ-1 relevant\nreason", []) == []

    def test_fields_copied_from_source_ticket(self, sample_tickets):
        """Every Ticket field comes from the fetched record, not the reply"""
        results = match_response("PROJ-1 High priority auth issue\nLogin related", sample_tickets)

        source = sample_tickets[0]
        assert results[0].model_dump(exclude={"ai_explanation"}) == source.model_dump()

    def test_serializes_explanation_as_camel_case(self, sample_tickets):
        results = match_response("PROJ-2\nSlow widgets", sample_tickets)
        assert results[0].model_dump(by_alias=True)["aiExplanation"] == "Slow widgets"

    @pytest.mark.parametrize(
        "reply",
        [
            "PROJ-1\nPROJ-2\nPROJ-3\nOTHER-1\nPROJ-10",
            "nothing relevant here",
            "XPROJ-1 and PROJ-100 and PROJ-01",
            "proj-1\nPROJ-2 PROJ-2 PROJ-2",
            "\n\n\n",
        ],
    )
    def test_results_are_subset_of_tickets(self, sample_tickets, reply):
        """Output keys are always a subset of the fetched keys"""
        fetched = {t.key for t in sample_tickets}
        results = match_response(reply, sample_tickets)
        keys = [r.key for r in results]

        assert set(keys) <= fetched
        assert len(keys) == len(set(keys))

    def test_key_must_match_exactly(self, sample_tickets):
        """No fuzzy matching: PROJ-01 is not PROJ-1"""
        assert match_response("PROJ-01 relevant", sample_tickets) == []
