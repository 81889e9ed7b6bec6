# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Tests for the license expression parser."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest
from spdxkit.errors import (
    DanglingConnectiveError,
    EmptyExpressionError,
    ExpectedConnectiveError,
    LicenseParseError,
    MissingConnectiveError,
    MixedConnectivesError,
    ParseErrorKind,
    TrailingContentError,
    UnbalancedParensError,
    UnterminatedGroupError,
)
from spdxkit.license_tree import (
    ConjunctiveLicenseSet,
    DisjunctiveLicenseSet,
    LicenseSet,
    NoAssertionLicense,
    NoneLicense,
    ProjectLicenseRef,
    StandardLicenseRef,
    license_ids,
)
from spdxkit.parser import LicenseExpressionParser, parse_license_expression
from spdxkit.registry import LicenseRegistry

MIT = StandardLicenseRef('MIT')
APACHE = StandardLicenseRef('Apache-2.0')
ISC = StandardLicenseRef('ISC')
BSD3 = StandardLicenseRef('BSD-3-Clause')


@pytest.fixture
def registry() -> LicenseRegistry:
    """Registry with a handful of listed ids."""
    return LicenseRegistry.from_ids(['MIT', 'Apache-2.0', 'ISC', 'BSD-3-Clause', 'GPL-2.0-only'])


@pytest.fixture
def parser(registry: LicenseRegistry) -> LicenseExpressionParser:
    """Strict parser over the small registry."""
    return LicenseExpressionParser(registry)


# ── Single identifiers ──────────────────────────────────────────────────


class TestSingleIdentifier:
    """Tests for expressions made of one identifier."""

    def test_listed_id(self, parser: LicenseExpressionParser) -> None:
        """Test listed id."""
        assert parser.parse('MIT') == MIT

    def test_surrounding_whitespace(self, parser: LicenseExpressionParser) -> None:
        """Test surrounding whitespace."""
        assert parser.parse(' \t MIT \r\n') == MIT

    def test_project_id(self, parser: LicenseExpressionParser) -> None:
        """Test project id."""
        assert parser.parse('LicenseRef-3') == ProjectLicenseRef('LicenseRef-3')

    def test_unlisted_id_is_project_local(self, parser: LicenseExpressionParser) -> None:
        """Test unlisted id is project local."""
        assert parser.parse('Custom-License') == ProjectLicenseRef('Custom-License')

    def test_none(self, parser: LicenseExpressionParser) -> None:
        """Test none."""
        assert parser.parse('NONE') == NoneLicense()

    def test_noassertion(self, parser: LicenseExpressionParser) -> None:
        """Test noassertion."""
        assert parser.parse('NOASSERTION') == NoAssertionLicense()

    def test_lowercase_none_is_not_sentinel(self, parser: LicenseExpressionParser) -> None:
        """Test lowercase none is not sentinel."""
        assert parser.parse('none') == ProjectLicenseRef('none')


# ── Groups ───────────────────────────────────────────────────────────────


class TestGroups:
    """Tests for parenthesised groups."""

    def test_conjunctive(self, parser: LicenseExpressionParser) -> None:
        """Test conjunctive."""
        assert parser.parse('(MIT AND Apache-2.0)') == ConjunctiveLicenseSet(MIT, APACHE)

    def test_disjunctive(self, parser: LicenseExpressionParser) -> None:
        """Test disjunctive."""
        assert parser.parse('(MIT OR Apache-2.0)') == DisjunctiveLicenseSet(MIT, APACHE)

    @pytest.mark.parametrize('word', ['and', 'And', 'aNd'])
    def test_connective_case_insensitive(self, parser: LicenseExpressionParser, word: str) -> None:
        """Test connective case insensitive."""
        assert parser.parse(f'(MIT {word} ISC)') == ConjunctiveLicenseSet(MIT, ISC)

    def test_lowercase_or(self, parser: LicenseExpressionParser) -> None:
        """Test lowercase or."""
        assert parser.parse('(MIT or ISC)') == DisjunctiveLicenseSet(MIT, ISC)

    def test_three_members(self, parser: LicenseExpressionParser) -> None:
        """Test three members."""
        assert parser.parse('(MIT AND Apache-2.0 AND ISC)') == ConjunctiveLicenseSet(MIT, APACHE, ISC)

    def test_nested(self, parser: LicenseExpressionParser) -> None:
        """Test nested."""
        tree = parser.parse('((MIT AND Apache-2.0) OR ISC)')
        assert tree == DisjunctiveLicenseSet(ConjunctiveLicenseSet(MIT, APACHE), ISC)

    def test_nested_both_sides(self, parser: LicenseExpressionParser) -> None:
        """Test nested both sides."""
        tree = parser.parse('((MIT AND ISC) OR (Apache-2.0 AND BSD-3-Clause))')
        assert tree == DisjunctiveLicenseSet(ConjunctiveLicenseSet(MIT, ISC), ConjunctiveLicenseSet(APACHE, BSD3))

    def test_nested_group_first_member_leaf_last(self, parser: LicenseExpressionParser) -> None:
        """Test nested group first member leaf last."""
        tree = parser.parse('(MIT OR (ISC AND (Apache-2.0 OR BSD-3-Clause)))')
        assert tree == DisjunctiveLicenseSet(
            MIT,
            ConjunctiveLicenseSet(ISC, DisjunctiveLicenseSet(APACHE, BSD3)),
        )

    def test_mixed_whitespace(self, parser: LicenseExpressionParser) -> None:
        """Tabs, CR and LF separate tokens like spaces."""
        assert parser.parse('(MIT\tAND\nISC)') == ConjunctiveLicenseSet(MIT, ISC)
        assert parser.parse('(MIT\r\nOR  \t ISC)') == DisjunctiveLicenseSet(MIT, ISC)

    def test_padding_inside_parens(self, parser: LicenseExpressionParser) -> None:
        """Test padding inside parens."""
        assert parser.parse('(  MIT AND ISC  )') == ConjunctiveLicenseSet(MIT, ISC)
        assert parser.parse('( ( MIT OR ISC ) AND BSD-3-Clause )') == ConjunctiveLicenseSet(
            DisjunctiveLicenseSet(MIT, ISC),
            BSD3,
        )

    def test_member_order_irrelevant(self, parser: LicenseExpressionParser) -> None:
        """Test member order irrelevant."""
        assert parser.parse('(MIT AND ISC)') == parser.parse('(ISC AND MIT)')

    def test_duplicate_members_collapse(self, parser: LicenseExpressionParser) -> None:
        """Test duplicate members collapse."""
        tree = parser.parse('(MIT AND MIT)')
        assert isinstance(tree, LicenseSet)
        assert tree.members == frozenset({MIT})

    def test_mixed_member_kinds(self, parser: LicenseExpressionParser) -> None:
        """Test mixed member kinds."""
        tree = parser.parse('(MIT OR LicenseRef-1 OR NOASSERTION)')
        assert tree == DisjunctiveLicenseSet(MIT, ProjectLicenseRef('LicenseRef-1'), NoAssertionLicense())


class TestSentinelsInGroups:
    """NONE and NOASSERTION inside a group are added exactly once."""

    def test_none_member(self, parser: LicenseExpressionParser) -> None:
        """Test none member."""
        tree = parser.parse('(MIT OR NONE)')
        assert isinstance(tree, LicenseSet)
        assert tree.members == frozenset({MIT, NoneLicense()})
        assert len(tree) == 2

    def test_only_sentinels(self, parser: LicenseExpressionParser) -> None:
        """Test only sentinels."""
        tree = parser.parse('(NONE AND NOASSERTION)')
        assert tree == ConjunctiveLicenseSet(NoneLicense(), NoAssertionLicense())

    def test_no_project_ref_named_like_sentinel(self, parser: LicenseExpressionParser) -> None:
        """Test no project ref named like sentinel."""
        tree = parser.parse('(NOASSERTION OR ISC)')
        assert ProjectLicenseRef('NOASSERTION') not in tree.members  # type: ignore[union-attr]


# ── Errors ───────────────────────────────────────────────────────────────


class TestParseErrors:
    """Tests for malformed expressions."""

    @pytest.mark.parametrize('text', ['', '   ', '\t\r\n'])
    def test_empty(self, parser: LicenseExpressionParser, text: str) -> None:
        """Test empty."""
        with pytest.raises(EmptyExpressionError) as exc_info:
            parser.parse(text)
        assert exc_info.value.position == 0
        assert exc_info.value.kind is ParseErrorKind.EMPTY_EXPRESSION

    def test_unterminated(self, parser: LicenseExpressionParser) -> None:
        """Test unterminated."""
        with pytest.raises(UnterminatedGroupError) as exc_info:
            parser.parse('(MIT AND ISC')
        assert exc_info.value.position == len('(MIT AND ISC')

    def test_lone_open_paren(self, parser: LicenseExpressionParser) -> None:
        """Test lone open paren."""
        with pytest.raises(UnterminatedGroupError):
            parser.parse('(')

    def test_empty_group(self, parser: LicenseExpressionParser) -> None:
        """Test empty group."""
        with pytest.raises(MissingConnectiveError):
            parser.parse('()')

    def test_single_member_group(self, parser: LicenseExpressionParser) -> None:
        """A group with one member has no connective."""
        with pytest.raises(MissingConnectiveError) as exc_info:
            parser.parse('(MIT)')
        assert exc_info.value.position == 0

    def test_nested_single_member_group(self, parser: LicenseExpressionParser) -> None:
        """Test nested single member group."""
        with pytest.raises(MissingConnectiveError) as exc_info:
            parser.parse('((MIT) AND ISC)')
        assert exc_info.value.position == 1

    def test_mixed_connectives(self, parser: LicenseExpressionParser) -> None:
        """Test mixed connectives."""
        with pytest.raises(MixedConnectivesError) as exc_info:
            parser.parse('(MIT AND ISC OR BSD-3-Clause)')
        assert exc_info.value.kind is ParseErrorKind.MIXED_CONNECTIVES

    def test_mixed_connectives_in_nested_group(self, parser: LicenseExpressionParser) -> None:
        """Test mixed connectives in nested group."""
        with pytest.raises(MixedConnectivesError) as exc_info:
            parser.parse('(MIT OR (ISC AND Apache-2.0 OR BSD-3-Clause))')
        assert exc_info.value.position == 8

    def test_missing_connective_between_members(self, parser: LicenseExpressionParser) -> None:
        """Test missing connective between members."""
        with pytest.raises(ExpectedConnectiveError) as exc_info:
            parser.parse('(MIT ISC)')
        assert exc_info.value.position == 5
        assert "'ISC'" in exc_info.value.detail

    def test_connective_needs_whitespace(self, parser: LicenseExpressionParser) -> None:
        """Test connective needs whitespace."""
        with pytest.raises(ExpectedConnectiveError):
            parser.parse('(MIT ANDISC)')

    @pytest.mark.parametrize('text', ['(MIT AND)', '(MIT AND )', '(MIT OR\t)'])
    def test_dangling_connective(self, parser: LicenseExpressionParser, text: str) -> None:
        """Test dangling connective."""
        with pytest.raises(DanglingConnectiveError) as exc_info:
            parser.parse(text)
        assert exc_info.value.position == 5

    def test_nested_group_unclosed(self, parser: LicenseExpressionParser) -> None:
        """Test nested group unclosed."""
        with pytest.raises(UnbalancedParensError) as exc_info:
            parser.parse('(MIT AND (ISC OR BSD-3-Clause)')
        assert exc_info.value.position == 9

    def test_extra_close_paren(self, parser: LicenseExpressionParser) -> None:
        """Test extra close paren."""
        with pytest.raises(UnbalancedParensError) as exc_info:
            parser.parse('(MIT AND ISC))')
        assert exc_info.value.position == 12

    def test_lone_close_paren(self, parser: LicenseExpressionParser) -> None:
        """Test lone close paren."""
        with pytest.raises(UnbalancedParensError):
            parser.parse(')')

    @pytest.mark.parametrize('text', ['MIT)', 'MIT(', 'M(IT'])
    def test_paren_in_identifier(self, parser: LicenseExpressionParser, text: str) -> None:
        """Test paren in identifier."""
        with pytest.raises(UnbalancedParensError):
            parser.parse(text)

    def test_separate_groups_at_top_level(self, parser: LicenseExpressionParser) -> None:
        """Test separate groups at top level."""
        with pytest.raises(UnbalancedParensError):
            parser.parse('(MIT) OR (ISC)')

    def test_trailing_content_strict(self, parser: LicenseExpressionParser) -> None:
        """Test trailing content strict."""
        with pytest.raises(TrailingContentError) as exc_info:
            parser.parse('MIT AND ISC')
        assert exc_info.value.position == 4

    def test_errors_are_value_errors(self, parser: LicenseExpressionParser) -> None:
        """Test errors are value errors."""
        with pytest.raises(ValueError):
            parser.parse('(MIT)')

    def test_message_has_caret(self, parser: LicenseExpressionParser) -> None:
        """Test message has caret."""
        with pytest.raises(LicenseParseError) as exc_info:
            parser.parse('(MIT ISC)')
        lines = str(exc_info.value).splitlines()
        assert lines[0].startswith('license expression error at position 5:')
        assert lines[1] == '  (MIT ISC)'
        assert lines[2] == '       ^'

    def test_position_relative_to_trimmed_text(self, parser: LicenseExpressionParser) -> None:
        """Test position relative to trimmed text."""
        with pytest.raises(ExpectedConnectiveError) as exc_info:
            parser.parse('   (MIT ISC)')
        assert exc_info.value.expression == '(MIT ISC)'
        assert exc_info.value.position == 5


class TestLenientMode:
    """Tests for strict=False."""

    def test_trailing_content_dropped(self, registry: LicenseRegistry) -> None:
        """Test trailing content dropped."""
        lenient = LicenseExpressionParser(registry, strict=False)
        with patch('spdxkit.parser.log') as mock_log:
            assert lenient.parse('MIT AND ISC') == MIT
        mock_log.warning.assert_called_once()
        assert mock_log.warning.call_args.kwargs['discarded'] == 'AND ISC'

    def test_groups_still_checked(self, registry: LicenseRegistry) -> None:
        """Test groups still checked."""
        lenient = LicenseExpressionParser(registry, strict=False)
        with pytest.raises(MixedConnectivesError):
            lenient.parse('(MIT AND ISC OR BSD-3-Clause)')

    def test_strict_property(self, registry: LicenseRegistry) -> None:
        """Test strict property."""
        assert LicenseExpressionParser(registry).strict is True
        assert LicenseExpressionParser(registry, strict=False).strict is False


# ── Properties ───────────────────────────────────────────────────────────


class TestRoundTrip:
    """Parsing the rendering of a tree yields an equal tree."""

    @pytest.mark.parametrize(
        'text',
        [
            'MIT',
            'LicenseRef-7',
            'NONE',
            'NOASSERTION',
            '(MIT AND Apache-2.0)',
            '(MIT OR NONE OR LicenseRef-1)',
            '((MIT AND ISC) OR (Apache-2.0 AND BSD-3-Clause))',
            '(MIT OR (ISC AND (Apache-2.0 OR BSD-3-Clause)))',
        ],
    )
    def test_round_trip(self, parser: LicenseExpressionParser, text: str) -> None:
        """Test round trip."""
        tree = parser.parse(text)
        assert parser.parse(str(tree)) == tree


class TestDeepNesting:
    """The parser does not recurse per nesting level."""

    def test_deep_left_nesting(self, parser: LicenseExpressionParser) -> None:
        """Test deep left nesting."""
        depth = 500
        text = 'MIT'
        for i in range(depth):
            text = f'({text} AND LicenseRef-{i})'
        tree = parser.parse(text)
        assert isinstance(tree, LicenseSet)
        assert len(license_ids(tree)) == depth + 1

    def test_deep_round_trip(self, parser: LicenseExpressionParser) -> None:
        """A 3000-deep tree renders, re-parses and compares equal."""
        depth = 3000
        text = 'MIT'
        for i in range(depth):
            text = f'({text} OR LicenseRef-{i})'
        tree = parser.parse(text)
        again = parser.parse(str(tree))
        assert again == tree
        assert again != parser.parse(text.replace('LicenseRef-0)', 'LicenseRef-x)', 1))

    def test_deep_unbalanced(self, parser: LicenseExpressionParser) -> None:
        """Deep input missing one ")" is rejected at the first inner group."""
        depth = 3000
        text = '(' * depth + 'MIT AND ISC' + ')' * (depth - 1)
        with pytest.raises(UnbalancedParensError) as exc_info:
            parser.parse(text)
        assert exc_info.value.position == 1


class TestModuleFunction:
    """Tests for parse_license_expression()."""

    def test_parses(self, registry: LicenseRegistry) -> None:
        """Test parses."""
        assert parse_license_expression('(MIT OR ISC)', registry) == DisjunctiveLicenseSet(MIT, ISC)

    def test_strict_flag(self, registry: LicenseRegistry) -> None:
        """Test strict flag."""
        with pytest.raises(TrailingContentError):
            parse_license_expression('MIT ISC', registry)
        with patch('spdxkit.parser.log'):
            assert parse_license_expression('MIT ISC', registry, strict=False) == MIT


class TestSharedParser:
    """One parser instance can serve several threads."""

    def test_concurrent_parses(self, parser: LicenseExpressionParser) -> None:
        """Test concurrent parses."""
        texts = [f'(MIT AND LicenseRef-{i})' for i in range(200)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            trees = list(pool.map(parser.parse, texts))
        for i, tree in enumerate(trees):
            assert tree == ConjunctiveLicenseSet(MIT, ProjectLicenseRef(f'LicenseRef-{i}'))
