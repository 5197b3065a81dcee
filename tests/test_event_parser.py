"""
Tests for match event extraction.
"""

import pytest

from exceptions import ConfigurationError
from extractors import MatchDataExtractor
from extractors.parsers.event_parser import EventParser, build_notes, keyword_type
from logger import EventType, Side

from page_builders import (
    event_row,
    events_grid,
    goal_body,
    page,
    player_link,
    soup,
    substitution_body,
    yellow_body,
)

HOME, AWAY = "10", "20"


def _events(rows, **kwargs):
    extractor = MatchDataExtractor(**kwargs)
    return extractor.extract_events(soup(page(events_grid(rows))), "5000", HOME, AWAY)


def _sample_rows():
    return [
        event_row(12, goal_body("7", "Jón Jónsson"), event_id=1),
        event_row(33, yellow_body("25", "Gunnar Þór"), reversed_row=True, event_id=2),
        event_row(
            60,
            substitution_body("15", "Páll Pálsson", "8", "Siggi Sig"),
            event_id=3,
        ),
        event_row(90, goal_body("22", "Arnar Már"), reversed_row=True, stoppage=3, event_id=4),
    ]


class TestClassification:
    """Event types from icon colours"""

    def setup_method(self):
        self.events = _events(_sample_rows())

    def test_types_in_order(self):
        assert [e.event_type for e in self.events] == [
            EventType.GOAL,
            EventType.YELLOW,
            EventType.SUBSTITUTION,
            EventType.GOAL,
        ]

    def test_goal_player(self):
        goal = self.events[0]
        assert goal.minute == 12
        assert goal.stoppage is None
        assert goal.ksi_player_id == "7"
        assert goal.player_name == "Jón Jónsson"

    def test_substitution_players(self):
        sub = self.events[2]
        assert sub.sub_on_ksi_player_id == "15"
        assert sub.sub_on_name == "Páll Pálsson"
        assert sub.sub_off_ksi_player_id == "8"
        assert sub.sub_off_name == "Siggi Sig"
        assert sub.ksi_player_id is None

    def test_substitution_player_parity(self):
        for event in self.events:
            if event.event_type == EventType.SUBSTITUTION:
                assert event.sub_on_ksi_player_id and event.sub_off_ksi_player_id
                assert event.sub_on_ksi_player_id != event.sub_off_ksi_player_id
            else:
                assert event.sub_on_ksi_player_id is None
                assert event.sub_off_ksi_player_id is None

    def test_every_substitution_has_distinct_on_and_off(self):
        rows = [
            event_row(
                50 + i,
                substitution_body(str(100 + i), "Inn %d" % i, str(200 + i), "Út %d" % i),
                event_id=i,
            )
            for i in range(3)
        ]
        subs = [e for e in _events(rows) if e.event_type == EventType.SUBSTITUTION]

        assert len(subs) == 3
        assert len({e.sub_on_ksi_player_id for e in subs} - {None}) == 3
        assert len({e.sub_off_ksi_player_id for e in subs} - {None}) == 3

    def test_on_class_on_second_link(self):
        body = (
            '<svg viewBox="0 0 16 16"><path stroke="#1A7941"/><path stroke="#DD3636"/></svg>'
            + player_link("8", "Siggi Sig")
            + player_link("15", "Páll Pálsson", "text-[#1A7941]")
        )
        sub = _events([event_row(60, body)])[0]

        assert sub.event_type == EventType.SUBSTITUTION
        assert (sub.sub_on_ksi_player_id, sub.sub_off_ksi_player_id) == ("15", "8")
        assert sub.sub_off_name == "Siggi Sig"

    def test_off_class_on_first_link(self):
        body = (
            '<svg viewBox="0 0 16 16"><path stroke="#1A7941"/><path stroke="#DD3636"/></svg>'
            + player_link("8", "Siggi Sig", "text-[#D80707]")
            + player_link("15", "Páll Pálsson")
        )
        sub = _events([event_row(60, body)])[0]

        assert (sub.sub_on_ksi_player_id, sub.sub_off_ksi_player_id) == ("15", "8")

    def test_stoppage_label(self):
        late = self.events[3]
        assert (late.minute, late.stoppage) == (90, 3)
        assert late.notes is None

    def test_sides(self):
        teams = [e.ksi_team_id for e in self.events]
        assert teams == [HOME, AWAY, HOME, AWAY]

    def test_indexes(self):
        assert [e.event_idx for e in self.events] == [0, 1, 2, 3]


class TestOrdering:
    """Identical output regardless of node order on the page"""

    def test_dom_order_does_not_matter(self):
        rows = _sample_rows()
        forward = _events(rows)
        backward = _events(list(reversed(rows)))

        assert [e.to_row() for e in forward] == [e.to_row() for e in backward]

    def test_same_minute_sorted_by_team_then_type(self):
        rows = [
            event_row(40, yellow_body("25", "Gunnar"), reversed_row=True, event_id=1),
            event_row(40, goal_body("7", "Jón"), event_id=2),
            event_row(40, yellow_body("9", "Óli"), event_id=3),
        ]
        events = _events(rows)

        assert [(e.ksi_team_id, e.event_type) for e in events] == [
            (HOME, EventType.GOAL),
            (HOME, EventType.YELLOW),
            (AWAY, EventType.YELLOW),
        ]

    def test_duplicates_collapsed(self):
        rows = [
            event_row(12, goal_body("7", "Jón"), event_id=1),
            event_row(12, goal_body("7", "Jón"), event_id=2),
        ]
        assert len(_events(rows)) == 1


class TestEdgeCases:
    def test_event_without_minute_discarded(self):
        rows = [event_row(None, goal_body("7", "Jón")), event_row(50, goal_body("8", "Ari"))]
        events = _events(rows)

        assert len(events) == 1
        assert events[0].minute == 50

    def test_notes_keep_extra_text(self):
        body = goal_body("7", "Jón") + "<span>Víti</span>"
        events = _events([event_row(70, body)])

        assert events[0].notes == "Víti"
        assert events[0].event_type == EventType.PENALTY

    def test_player_team_map_overrides_column(self):
        extractor = MatchDataExtractor()
        html = page(events_grid([event_row(5, goal_body("7", "Jón"))]))
        events = extractor.extract_events(soup(html), "5000", HOME, AWAY, {"7": AWAY})

        assert events[0].ksi_team_id == AWAY

    def test_reversed_side_configurable(self):
        events = _events(
            [event_row(5, goal_body("7", "Jón"), reversed_row=True)],
            reversed_row_side=Side.HOME,
        )
        assert events[0].ksi_team_id == HOME

    def test_legacy_two_player_substitution(self):
        body = '<svg viewBox="0 0 8 8"></svg>' + player_link("1", "Inn") + player_link("2", "Út")
        events = _events([event_row(61, body)], icon_variants=("legacy",))

        assert events[0].event_type == EventType.SUBSTITUTION
        assert (events[0].sub_on_ksi_player_id, events[0].sub_off_ksi_player_id) == ("1", "2")

    def test_legacy_red_stroke(self):
        body = '<svg><path stroke="#DD3636"/></svg>' + player_link("4", "Rauður")
        events = _events([event_row(77, body)], icon_variants=("legacy",))

        assert events[0].event_type == EventType.RED

    def test_no_region(self):
        extractor = MatchDataExtractor()
        assert extractor.extract_events(soup(page("<div></div>")), "1", HOME, AWAY) == []


class TestHelpers:
    def test_keyword_type(self):
        assert keyword_type(["Sjálfsmark"]) == EventType.OWN_GOAL
        assert keyword_type(["Seinna gult spjald"]) == EventType.SECOND_YELLOW
        assert keyword_type([]) is None

    def test_build_notes(self):
        assert build_notes("55´ Jón Jónsson", ["Jón Jónsson"]) is None
        assert build_notes("55´ Jón Jónsson (víti)", ["Jón Jónsson"]) == "(víti)"
        assert build_notes("90´ 2 Jón", ["Jón"], ["2"]) is None

    def test_bad_side_rejected(self):
        with pytest.raises(ValueError):
            EventParser(reversed_row_side="left")

    def test_unknown_variant_rejected(self):
        with pytest.raises(ConfigurationError):
            EventParser(icon_variants=("neon",))
