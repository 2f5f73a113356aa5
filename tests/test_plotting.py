"""Tests for the matplotlib fan chart drawing."""

import pytest

from geometry import RadialGeometryPlanner
from plotting import card_text_rows


class TestRootCardText:
    @pytest.mark.parametrize("size", [(600, 520), (900, 700), (1600, 1200)])
    def test_rows_inside_card(self, size):
        card = RadialGeometryPlanner().plan(*size, 3).root_card
        name_y, subtitle_y = card_text_rows(card, True)
        top, bottom = card.y, card.y + card.height

        assert top < name_y < subtitle_y < bottom
        # Room for half a line of 8pt text below the subtitle
        assert bottom - subtitle_y >= card.height * 0.25

    def test_name_centred_without_subtitle(self):
        card = RadialGeometryPlanner().plan(600, 520, 3).root_card
        name_y, subtitle_y = card_text_rows(card, False)
        assert subtitle_y is None
        assert name_y == pytest.approx(card.y + card.height / 2)
