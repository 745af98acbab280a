"""
Host Adapter
============
Connects the text checker to a host linter's syntax tree.

The host hands over node descriptors (kind, value, source range, parent);
the adapter picks the text unit kind, checks the node's value, and maps
every issue back to source offsets as a report record with an optional
fix. String and template literals start one character (quote or backtick)
before their value, line and block comments two (``//`` or ``/*``).

A grammar service failure fails only the node being checked: it is logged,
recorded in ``errors``, and the run continues.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .base import Issue, IssueType, TextKind
from .config import load_configuration
from .config_logging import GrammarLintError, GrammarServiceError, get_logger
from .engine import TextChecker

__version__ = "1.0.0"

logger = get_logger(__name__)

# Host node kind -> text unit kind
NODE_KINDS = {
    'Literal': TextKind.STRING,
    'JSXText': TextKind.STRING,
    'TemplateElement': TextKind.TEMPLATE,
    'Identifier': TextKind.IDENTIFIER,
    'Line': TextKind.COMMENT,
    'Block': TextKind.COMMENT,
}

# Characters between a node's range start and its value
VALUE_OFFSETS = {
    'Literal': 1,
    'TemplateElement': 1,
    'Line': 2,
    'Block': 2,
}

# Module specifiers are paths, not prose.
EXCLUDED_PARENTS = {
    'ImportDeclaration',
    'ImportExpression',
    'ExportNamedDeclaration',
    'ExportAllDeclaration',
}

MESSAGE_TEMPLATES = {
    IssueType.SPELLING: 'Possible misspelling: "{{word}}"',
}
DEFAULT_TEMPLATE = '{{message}}'

_PLACEHOLDER = re.compile(r'\{\{\s*(\w+)\s*\}\}')


@dataclass
class SourceNode:
    """Node descriptor supplied by the host."""
    kind: str
    value: Any
    range: Tuple[int, int]
    parent: Optional['SourceNode'] = None
    raw: Optional[str] = None


@dataclass(frozen=True)
class Fix:
    range_start: int
    range_end: int
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {'range': [self.range_start, self.range_end], 'text': self.text}


@dataclass
class Report:
    """One report for the host; ``fix`` is None when no safe replacement exists."""
    message: str
    loc_start: int
    loc_end: int
    data: Dict[str, str] = field(default_factory=dict)
    fix: Optional[Fix] = None
    issue: Optional[Issue] = None

    def render(self) -> str:
        """Message with its named placeholders filled in from ``data``."""
        return _PLACEHOLDER.sub(lambda m: self.data.get(m.group(1), m.group()), self.message)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'message': self.message,
            'data': dict(self.data),
            'loc': {'start': self.loc_start, 'end': self.loc_end},
        }
        # The host treats a present "fix" key as fixable.
        if self.fix is not None:
            result['fix'] = self.fix.to_dict()
        return result


class GrammarLintRule:
    """
    Lint rule over prose in source code.

    Args:
        options: Host rule options (camelCase, see CheckConfiguration.from_options)
        dictionary_cache: Dictionary cache (default: process-wide cache)
        grammar_service: Grammar service (default: shared LanguageToolService)
        environ: Environment for overrides (default: os.environ)

    Raises:
        ConfigurationError: invalid options
        DictionaryError: spelling dictionary cannot be loaded
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None, dictionary_cache=None,
                 grammar_service=None, environ: Optional[Dict[str, str]] = None):
        self.config = load_configuration(options, environ)
        self.checker = TextChecker(self.config, dictionary_cache=dictionary_cache,
                                   grammar_service=grammar_service)
        self.errors: List[GrammarLintError] = []

    def close(self):
        self.checker.close()

    def text_of(self, node: SourceNode) -> Optional[str]:
        """The checkable text of ``node``, or None when it has none."""
        if node.kind not in NODE_KINDS:
            return None
        if node.parent is not None and node.parent.kind in EXCLUDED_PARENTS:
            return None
        value = node.raw if node.kind == 'TemplateElement' and node.raw is not None else node.value
        if not isinstance(value, str):
            return None
        return value

    def check_node(self, node: SourceNode) -> List[Report]:
        """Check one node; returns its reports (empty on grammar failure)."""
        text = self.text_of(node)
        if text is None:
            return []

        try:
            result = self.checker.check_text(text, NODE_KINDS[node.kind])
        except GrammarServiceError as e:
            logger.exception("Grammar check failed", node_kind=node.kind,
                             range_start=node.range[0])
            self.errors.append(e)
            return []

        base = node.range[0] + VALUE_OFFSETS.get(node.kind, 0)
        return [self._report(issue, text, base) for issue in result.issues]

    def check_comment(self, comment: SourceNode) -> List[Report]:
        if comment.kind not in ('Line', 'Block'):
            raise ValueError(f"Not a comment node: {comment.kind}")
        return self.check_node(comment)

    def check_nodes(self, nodes: Iterable[SourceNode]) -> List[Report]:
        """Check nodes in order; each is resolved before the next starts."""
        reports = []
        for node in nodes:
            reports.extend(self.check_node(node))
        return reports

    @staticmethod
    def _report(issue: Issue, text: str, base: int) -> Report:
        fix = None
        if issue.replacement is not None:
            fix = Fix(base + issue.start, base + issue.end, issue.replacement)
        return Report(
            message=MESSAGE_TEMPLATES.get(issue.type, DEFAULT_TEMPLATE),
            loc_start=base + issue.start,
            loc_end=base + issue.end,
            data={
                'word': issue.text_in(text),
                'message': issue.message,
                'type': issue.type.value,
                'suggestion': issue.suggestion or '',
            },
            fix=fix,
            issue=issue,
        )
