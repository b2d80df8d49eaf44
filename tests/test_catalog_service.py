"""
Unit tests for the prompt catalog service
"""
import zipfile

import pytest

from tips.models import PromptEntry
from tips.services.catalog_service import WORKBOOK_ERRORS, list_categories, load_prompts, parse_prompt_rows

HEADER = ('Topic', 'Prompt')
GOOD_ROWS = [
    ('Flexbox', 'Explain flexbox'),
    ('Grid', 'Explain CSS grid'),
    ('Specificity', 'Explain specificity'),
]
BAD_ROWS = [
    (None, 'Prompt without topic'),
    ('Topic without prompt', None),
    ('   ', 'Whitespace topic'),
    ('Only topic',),
]


class TestLoadPrompts:
    """Test cases for load_prompts"""

    def test_loads_rows_in_order_and_skips_header(self, make_workbook):
        path = make_workbook({'htmlcss': [HEADER] + GOOD_ROWS})

        result = load_prompts('htmlcss', path)

        assert result.ok
        assert result.entries == [PromptEntry(t, p) for t, p in GOOD_ROWS]

    def test_skips_incomplete_rows(self, make_workbook):
        path = make_workbook({'htmlcss': [HEADER, GOOD_ROWS[0]] + BAD_ROWS + [GOOD_ROWS[1]]})

        result = load_prompts('htmlcss', path)

        assert result.ok
        assert [e.topic for e in result.entries] == ['Flexbox', 'Grid']

    def test_strips_cell_text_and_converts_numbers(self, make_workbook):
        path = make_workbook({'htmlcss': [HEADER, ('  Grid  ', ' Explain grid '), (42, 'The answer')]})

        result = load_prompts('htmlcss', path)

        assert result.entries == [PromptEntry('Grid', 'Explain grid'), PromptEntry('42', 'The answer')]

    def test_only_reads_requested_sheet(self, make_workbook):
        path = make_workbook({
            'htmlcss': [HEADER, GOOD_ROWS[0]],
            'prompts': [HEADER, ('Git', 'Explain rebase')],
        })

        result = load_prompts('prompts', path)

        assert result.entries == [PromptEntry('Git', 'Explain rebase')]

    def test_missing_sheet_is_empty_not_error(self, make_workbook):
        path = make_workbook({'htmlcss': [HEADER] + GOOD_ROWS})

        result = load_prompts('python', path)

        assert result.ok
        assert result.entries == []

    def test_header_only_sheet_is_empty(self, make_workbook):
        path = make_workbook({'htmlcss': [HEADER]})

        result = load_prompts('htmlcss', path)

        assert result.ok
        assert result.entries == []

    def test_missing_workbook_is_error(self, tmp_path):
        result = load_prompts('htmlcss', tmp_path / 'does-not-exist.xlsx')

        assert not result.ok
        assert result.entries == []
        assert 'Could not open prompt workbook' in result.error

    def test_corrupt_workbook_is_error(self, tmp_path):
        path = tmp_path / 'prompts.xlsx'
        path.write_text('this is not a zip archive')

        result = load_prompts('htmlcss', path)

        assert not result.ok
        assert result.error

    def test_malformed_xml_inside_zip_is_error(self, tmp_path):
        path = tmp_path / 'prompts.xlsx'
        with zipfile.ZipFile(path, 'w') as archive:
            archive.writestr('[Content_Types].xml', '<Types><broken')

        result = load_prompts('htmlcss', path)

        assert not result.ok
        assert 'Could not open prompt workbook' in result.error

    def test_bundled_workbook_has_htmlcss_prompts(self):
        result = load_prompts('htmlcss')

        assert result.ok
        assert len(result.entries) == 12
        assert result.entries[0] == PromptEntry(
            'Flexbox',
            'Explain how CSS flexbox distributes space between items along the main axis.'
        )


class TestSkipLogic:
    """Skipping incomplete rows doesn't depend on where they appear"""

    @pytest.mark.parametrize('layout', [
        BAD_ROWS + GOOD_ROWS,
        GOOD_ROWS + BAD_ROWS,
        [BAD_ROWS[0], GOOD_ROWS[0], BAD_ROWS[1], GOOD_ROWS[1], BAD_ROWS[2], BAD_ROWS[3], GOOD_ROWS[2]],
        [GOOD_ROWS[0], BAD_ROWS[3], BAD_ROWS[2], GOOD_ROWS[1], GOOD_ROWS[2], BAD_ROWS[1], BAD_ROWS[0]],
    ])
    def test_interspersed_bad_rows_do_not_change_result(self, layout):
        assert parse_prompt_rows(layout) == parse_prompt_rows(GOOD_ROWS)

    def test_handles_none_and_short_rows(self):
        assert parse_prompt_rows([None, (), ('a',), ('a', 'b', 'extra')]) == [PromptEntry('a', 'b')]


def test_list_categories(make_workbook):
    path = make_workbook({'htmlcss': [HEADER], 'prompts': [HEADER]})

    assert list_categories(path) == ['htmlcss', 'prompts']


def test_list_categories_on_missing_workbook_raises_workbook_error(tmp_path):
    with pytest.raises(WORKBOOK_ERRORS):
        list_categories(tmp_path / 'missing.xlsx')
