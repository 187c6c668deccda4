from campusmap.config.settings import RankingSettings
from campusmap.domain.models import Category, Coordinate, Instant, QueryContext, Resource, Schedule, SortStrategy
from campusmap.features.filters import filter_resources
from campusmap.scoring.ranking import rank_resources, relevance_score


def _resource(rid: str, name: str, *, lat: float = 39.5, lon: float = -84.7, days=None, hours=("09:00", "17:00")):
    schedule = None
    if days:
        schedule = Schedule(days=days, open=hours[0], close=hours[1])
    return Resource(
        id=rid,
        name=name,
        category=Category.STUDY,
        location=Coordinate(lat=lat, lon=lon),
        schedule=schedule,
    )


ALL_WEEK = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri"]

KING = _resource("R1", "King Library", lat=39.5094, lon=-84.7389, days=ALL_WEEK, hours=("08:00", "22:00"))
BENTON = _resource("R2", "Benton Hall", lat=39.5067, lon=-84.7316, days=WEEKDAYS, hours=("09:00", "21:00"))

TUE_10 = Instant(weekday="Tue", minutes_of_day="10:00")
SAT_10 = Instant(weekday="Sat", minutes_of_day="10:00")


def _ids(resources):
    return [r.id for r in resources]


def test_scenario_filter_then_rank():
    data = [KING, BENTON]
    ctx = QueryContext(query="hall", sort="name")
    filtered = filter_resources(data, ctx, TUE_10)
    assert _ids(filtered) == ["R2"]
    assert _ids(rank_resources(filtered, ctx, TUE_10)) == ["R2"]

    # Saturday: King Library is open, Benton Hall is closed.
    open_first = QueryContext(sort="open-first")
    assert _ids(rank_resources([BENTON, KING], open_first, SAT_10)) == ["R1", "R2"]


def test_name_sort_is_case_insensitive_with_deterministic_ties():
    data = [
        _resource("a", "benton"),
        _resource("b", "Armstrong"),
        _resource("c", "zeta"),
        _resource("d", "apple"),
        _resource("e", "Zeta"),
    ]
    ranked = rank_resources(data, QueryContext(sort=SortStrategy.NAME), TUE_10)
    assert [r.name for r in ranked] == ["apple", "Armstrong", "benton", "Zeta", "zeta"]


def test_equal_keys_keep_input_order():
    data = [
        _resource("x1", "Same", days=WEEKDAYS),
        _resource("x2", "Same", days=WEEKDAYS),
        _resource("x3", "Same"),
        _resource("x4", "Same", days=WEEKDAYS),
    ]
    assert _ids(rank_resources(data, QueryContext(sort="name"), TUE_10)) == ["x1", "x2", "x3", "x4"]
    assert _ids(rank_resources(data, QueryContext(sort="open"), TUE_10)) == ["x1", "x2", "x4", "x3"]
    assert _ids(rank_resources(data, QueryContext(sort="relevance"), SAT_10)) == ["x1", "x2", "x3", "x4"]


def test_distance_sort_orders_nearest_first():
    origin = Coordinate(lat=39.5067, lon=-84.7316)
    far = _resource("far", "Far", lat=39.60, lon=-84.90)
    ctx = QueryContext(sort="distance", origin=origin)
    assert _ids(rank_resources([far, KING, BENTON], ctx, TUE_10)) == ["R2", "R1", "far"]


def test_distance_sort_without_origin_is_a_no_op():
    far = _resource("far", "Far", lat=39.60, lon=-84.90)
    data = [far, BENTON, KING]
    ranked = rank_resources(data, QueryContext(sort="distance"), TUE_10)
    assert _ids(ranked) == ["far", "R2", "R1"]
    assert ranked is not data


def test_context_with_origin_builds_a_new_context():
    ctx = QueryContext(sort="distance")
    located = ctx.with_origin(Coordinate(lat=39.5094, lon=-84.7389))
    assert ctx.origin is None
    assert _ids(rank_resources([BENTON, KING], located, TUE_10)) == ["R1", "R2"]


def test_relevance_score_combines_match_position_and_open_bonus():
    assert relevance_score(KING, "library", TUE_10) == 5 - 10
    assert relevance_score(BENTON, "library", TUE_10) == 9999 - 10
    assert relevance_score(BENTON, "library", SAT_10) == 9999
    assert relevance_score(KING, "", SAT_10) == -10
    assert relevance_score(BENTON, "BENTON", SAT_10) == 0


def test_relevance_prefers_early_matches_then_open_resources():
    study = _resource("s", "Hall of Study", days=["Sat"])
    lab = _resource("l", "Science Hall", days=WEEKDAYS)
    ctx = QueryContext(query="hall")
    # Saturday: "Hall of Study" matches at 0 and is open; "Science Hall" matches at 8 and is closed.
    assert _ids(rank_resources([lab, study], ctx, SAT_10)) == ["s", "l"]
    # Empty query: every name matches at 0, so open resources come first.
    assert _ids(rank_resources([BENTON, KING], QueryContext(), SAT_10)) == ["R1", "R2"]


def test_relevance_knobs_come_from_settings():
    no_bonus = RankingSettings(relevance_open_bonus=0)
    assert relevance_score(KING, "", SAT_10, settings=no_bonus) == 0
    assert _ids(rank_resources([BENTON, KING], QueryContext(), SAT_10, settings=no_bonus)) == ["R2", "R1"]


def test_unknown_sort_falls_back_to_relevance():
    ctx = QueryContext(sort="popularity")
    assert ctx.sort is SortStrategy.RELEVANCE
    assert _ids(rank_resources([BENTON, KING], ctx, SAT_10)) == ["R1", "R2"]


def test_empty_input_ranks_to_empty_list():
    for strategy in SortStrategy:
        assert rank_resources([], QueryContext(sort=strategy), TUE_10) == []


def test_relevance_position_is_found_in_the_case_folded_name():
    strasse = _resource("R9", "Große Straße Hall")
    # "große straße hall".casefold() == "grosse strasse hall"
    assert relevance_score(strasse, "STRASSE", SAT_10) == 7
    assert relevance_score(strasse, QueryContext(query="Hall").query, SAT_10) == 15
