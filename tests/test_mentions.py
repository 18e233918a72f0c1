# =============================================================================
# File: tests/test_mentions.py
# Description: Mention extraction and roster resolution
# =============================================================================

from collabhub.chat.mentions import extract_mentions, normalize_display_name, resolve_mentions
from collabhub.membership.read_models import UserSummary


class TestExtractMentions:

    def test_lowercases_and_keeps_underscores(self):
        assert extract_mentions("hi @Alice and @bob_2") == ["alice", "bob_2"]

    def test_duplicates_preserved_in_order(self):
        assert extract_mentions("@bob @Alice @BOB") == ["bob", "alice", "bob"]

    def test_trailing_punctuation_is_not_part_of_token(self):
        assert extract_mentions("thanks @Bob. see @carol, ok?") == ["bob", "carol"]

    def test_non_ascii_letters_end_the_token(self):
        assert extract_mentions("@José") == ["jos"]

    def test_email_like_text_yields_domain_token(self):
        assert extract_mentions("mail me at a@example.com") == ["example"]

    def test_no_mentions(self):
        assert extract_mentions("plain text") == []
        assert extract_mentions("") == []
        assert extract_mentions("@ alone") == []


class TestResolveMentions:

    roster = [
        UserSummary(id=2, name="Bob"),
        UserSummary(id=3, name="Carol Ann"),
        UserSummary(id=7, name="bob"),
    ]

    def test_normalize_strips_all_whitespace(self):
        assert normalize_display_name(" Carol\tAnn ") == "carolann"

    def test_case_insensitive_exact_match(self):
        resolved = resolve_mentions(["bob"], self.roster)
        assert resolved[0].user.id == 2
        assert resolved[0].resolved

    def test_multi_word_names_match_without_spaces(self):
        resolved = resolve_mentions(["carolann"], self.roster)
        assert resolved[0].user.id == 3

    def test_partial_names_do_not_match(self):
        resolved = resolve_mentions(["carol", "bo"], self.roster)
        assert [m.resolved for m in resolved] == [False, False]

    def test_first_roster_entry_wins_on_name_collision(self):
        resolved = resolve_mentions(["bob"], list(reversed(self.roster)))
        assert resolved[0].user.id == 7

    def test_one_result_per_token(self):
        resolved = resolve_mentions(["bob", "nobody", "bob"], self.roster)
        assert [m.token for m in resolved] == ["bob", "nobody", "bob"]
        assert resolved[1].user is None
