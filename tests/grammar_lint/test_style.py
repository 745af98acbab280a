"""
Tests for Style Module
======================
Tests for the Microsoft Writing Style rule catalog, StyleRuleEngine and the
Proselint wrapper.
"""

from types import SimpleNamespace

import pytest

from grammar_lint.base import IssueType, Severity
from grammar_lint.config import CheckConfiguration
from grammar_lint.readability.heuristics import Suggestion
from grammar_lint.reconcile import reconcile
from grammar_lint.style.proselint import ProselintWrapper, StyleFinding
from grammar_lint.style.rules import (
    StyleRuleEngine, check_contractions, check_gender_neutral, check_passive_voice,
    check_prohibited, check_readability, check_terminology, check_weak_words,
    expand_contraction,
)


@pytest.fixture
def sample_texts():
    """Sample texts for testing."""
    return [
        "This is simply great.",
        "Please login now.",
        "It isn't ready.",
        "The file was deleted by the job.",
        "There is a very long list of guys here.",
        "Execute the script in order to kill the process.",
    ]


class TestTerminology:
    """Tests for the terminology rule."""

    def test_login(self):
        """Preferred terms replace the matched term."""
        issues = check_terminology("Please login now.")
        assert len(issues) == 1
        issue = issues[0]
        assert issue.type is IssueType.TERMINOLOGY
        assert issue.severity is Severity.ERROR
        assert (issue.start, issue.end) == (7, 12)
        assert issue.replacement == "sign in"

    def test_capital_preserved(self):
        """A capitalised term gets a capitalised replacement."""
        assert check_terminology("Login here.")[0].replacement == "Sign in"

    def test_already_preferred_not_matched(self):
        """"email address" does not match "email" again."""
        assert check_terminology("Use your email address.") == []
        assert check_terminology("Send an email.")[0].replacement == "email address"

    def test_preferred_prefix_of_term(self):
        """"click on" is reported even though "click" starts it."""
        text = "Click on the button."
        issues = check_terminology(text)
        assert [(i.start, i.end, i.replacement) for i in issues] == [(0, 8, "Click")]
        assert reconcile(text, issues).corrected_text == "Click the button."

    @pytest.mark.parametrize("text,replacement", [
        ("Press on Enter.", "Press"),
        ("Right-click on the icon.", "Right-click"),
        ("Double-click on the file.", "Double-click"),
    ])
    def test_verb_on_phrases(self, text, replacement):
        """Every "<verb> on" entry reaches its replacement."""
        assert [i.replacement for i in check_terminology(text)] == [replacement]

    def test_preferred_form_needs_word_boundary(self):
        """"email addressing" is not the preferred form "email address"."""
        issues = check_terminology("Stop email addressing.")
        assert [i.replacement for i in issues] == ["email address"]

    def test_whole_word_only(self):
        """Terms inside longer words are not matched."""
        assert check_terminology("The loginless flow.") == []


class TestContractions:
    """Tests for the contraction rule."""

    def test_expansion(self):
        """Contractions are replaced by their expansion."""
        issues = check_contractions("It isn't ready.")
        assert len(issues) == 1
        assert (issues[0].start, issues[0].end) == (3, 8)
        assert issues[0].replacement == "is not"
        assert issues[0].severity is Severity.WARNING

    def test_curly_apostrophe(self):
        """Typographic apostrophes match too."""
        assert check_contractions("It isn’t ready.")[0].replacement == "is not"

    @pytest.mark.parametrize("contraction,expected", [
        ("Don't", "Do not"),
        ("can't", "cannot"),
        ("Can't", "Cannot"),
        ("it's", "it is"),
    ])
    def test_expand_contraction(self, contraction, expected):
        """Expansions keep a leading capital."""
        assert expand_contraction(contraction) == expected


class TestWeakWords:
    """Tests for the weak-word rule."""

    def test_removable(self):
        """Removable weak words are replaced by the empty string."""
        issues = check_weak_words("This is simply great.")
        assert [(i.start, i.end, i.replacement) for i in issues] == [(8, 14, '')]

    def test_synonym(self):
        """Hedge phrases with a synonym get it as replacement."""
        issues = check_weak_words("Run it in order to test.")
        assert issues[0].replacement == "to"

    def test_no_replacement(self):
        """Other weak words carry no replacement."""
        issues = check_weak_words("It might work.")
        assert issues[0].replacement is None

    def test_not_inside_contraction(self):
        """"could" does not match inside "couldn't"."""
        assert check_weak_words("It couldn't work.") == []


class TestProhibited:
    """Tests for the prohibited-term rule."""

    def test_removable(self):
        """Removable phrases are deleted."""
        issues = check_prohibited("Please note the limit.")
        assert issues[0].replacement == ''
        assert issues[0].severity is Severity.ERROR

    def test_substitute(self):
        """Substitutes keep the capital."""
        assert check_prohibited("Execute the script.")[0].replacement == "Run"

    def test_kill_has_no_replacement(self):
        """Terms with several alternatives only carry advice."""
        issue = check_prohibited("Kill the process.")[0]
        assert issue.replacement is None
        assert issue.suggestion == "stop, end, or close"


class TestGenderNeutral:
    """Tests for the gender-neutral rule."""

    def test_chairman(self):
        """Gendered terms are replaced by neutral ones."""
        assert check_gender_neutral("Ask the chairman.")[0].replacement == "chair"

    def test_slash_forms(self):
        """Slash pairs are matched as one term."""
        issue = check_gender_neutral("Ask if he/she agrees.")[0]
        assert issue.replacement == "they"
        assert (issue.start, issue.end) == (7, 13)


class TestPassiveAndReadability:
    """Tests for the rules delegated to the readability heuristics."""

    def test_passive_voice(self):
        """Passive constructions are reported without replacement."""
        issues = check_passive_voice("The file was deleted by the job.")
        assert [(i.start, i.end) for i in issues] == [(9, 20)]
        assert issues[0].replacement is None

    def test_adjectival_participle_ignored(self):
        """Common adjectival participles are not passive voice."""
        assert check_passive_voice("The value is required.") == []

    def test_readability_excludes_passive(self):
        """Passive voice is reported only by its own rule."""
        issues = check_readability("The file was deleted by the job.")
        assert not any('passive' in i.message for i in issues)

    def test_readability_findings(self):
        """Readability issues are informational and carry no replacement."""
        issues = check_readability("There is a very long list.")
        assert issues
        assert all(i.type is IssueType.READABILITY for i in issues)
        assert all(i.severity is Severity.INFO for i in issues)
        assert all(i.replacement is None for i in issues)
        assert any('There is' in i.message for i in issues)


class TestStyleRuleEngine:
    """Tests for StyleRuleEngine."""

    def test_toggles(self):
        """Disabled rules produce nothing."""
        engine = StyleRuleEngine(CheckConfiguration(terminology=False))
        issues = engine.check_text("Please login now.")
        assert not any(i.type is IssueType.TERMINOLOGY for i in issues)

    def test_all_rules(self, sample_texts):
        """Every issue has a valid range in its own text."""
        engine = StyleRuleEngine(CheckConfiguration())
        for text in sample_texts:
            for issue in engine.check_text(text):
                assert 0 <= issue.start < issue.end <= len(text)

    def test_idempotent_corrections(self):
        """Corrected text does not re-trigger the rules that fixed it."""
        text = "Send an email. Don't login. Ask the chairman."
        issues = check_terminology(text) + check_contractions(text) + check_gender_neutral(text)
        corrected = reconcile(text, issues).corrected_text
        assert corrected == "Send an email address. Do not sign in. Ask the chair."
        assert check_terminology(corrected) == []
        assert check_contractions(corrected) == []
        assert check_gender_neutral(corrected) == []

    def test_counts(self):
        """counts groups issues by type."""
        issues = check_contractions("It isn't. It's.")
        assert StyleRuleEngine.counts(issues) == {'contraction': 2}


class FakeGrader:
    is_available = True
    error = None

    def check(self, text, max_grade):
        return [Suggestion(0, len(text), f"sentence above the target of {max_grade:g}")]


class FakeProselint:
    is_available = True
    error = None

    def check(self, text):
        return [StyleFinding('cliches.misc', 'Avoid the cliche.', 0, 4)]


class TestReadabilityExtras:
    """Tests for the optional grade and proselint sources."""

    def test_grade_findings(self):
        """Sentences above maxGradeLevel become readability issues."""
        engine = StyleRuleEngine(CheckConfiguration(max_grade_level=8), grader=FakeGrader())
        issues = [i for i in engine.check_text("Run it.") if 'target of 8' in i.message]
        assert [(i.start, i.end) for i in issues] == [(0, 7)]
        assert issues[0].replacement is None

    def test_proselint_findings(self):
        """Proselint findings become readability issues."""
        engine = StyleRuleEngine(CheckConfiguration(use_proselint=True), proselint=FakeProselint())
        issues = [i for i in engine.check_text("Fine text here.") if 'cliche' in i.message]
        assert len(issues) == 1
        assert issues[0].type is IssueType.READABILITY
        assert issues[0].message == 'Readability issue: Avoid the cliche.'

    def test_extras_follow_readability_toggle(self):
        """Disabling readability disables the extra sources."""
        config = CheckConfiguration(readability=False, use_proselint=True, max_grade_level=1)
        engine = StyleRuleEngine(config, grader=FakeGrader(), proselint=FakeProselint())
        assert engine.check_text("Fine text here.") == []

    def test_unavailable_source_ignored(self):
        """An unavailable source adds nothing."""
        grader = FakeGrader()
        grader.is_available = False
        engine = StyleRuleEngine(CheckConfiguration(max_grade_level=1), grader=grader)
        assert not any('target' in i.message for i in engine.check_text("Fine text here."))


class TestProselintWrapper:
    """Tests for ProselintWrapper."""

    @pytest.fixture
    def wrapper(self):
        """Wrapper running against a stand-in legacy lint function."""
        wrapper = ProselintWrapper()
        wrapper._available = True
        wrapper._legacy_api = True
        wrapper._proselint = SimpleNamespace(tools=SimpleNamespace(lint=lambda text: [
            ('cliches.misc', 'Cliche.', 1, 0, 0, 4, 4, 'warning', None),
            ('misc.passive', 'Passive.', 1, 5, 5, 9, 4, 'warning', None),
            ('typography.symbols', 'Out of range.', 1, 0, 0, 99, 99, 'warning', None),
        ]))
        return wrapper

    def test_findings_filtered(self, wrapper):
        """Duplicated checks and invalid ranges are dropped."""
        findings = wrapper.check("Fine text here.")
        assert findings == [StyleFinding('cliches.misc', 'Cliche.', 0, 4)]

    def test_lint_failure(self, wrapper):
        """A failing lint degrades to no findings."""
        def fail(text):
            raise RuntimeError("broken check")
        wrapper._proselint = SimpleNamespace(tools=SimpleNamespace(lint=fail))
        assert wrapper.check("Fine text here.") == []
        assert 'broken check' in wrapper.error

    def test_unavailable(self):
        """Without proselint there are no findings."""
        wrapper = ProselintWrapper()
        wrapper._available = False
        assert wrapper.check("Fine text here.") == []

    def test_unknown_result_shape(self):
        """Unrecognised results are ignored."""
        assert ProselintWrapper._to_finding(42) is None

    def test_real_proselint(self):
        """Real proselint findings have valid ranges."""
        wrapper = ProselintWrapper()
        if not wrapper.is_available:
            pytest.skip("Proselint not available")
        text = "It is very unique and at the end of the day we decided."
        for finding in wrapper.check(text):
            assert 0 <= finding.start < finding.end <= len(text)
