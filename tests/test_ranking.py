from golfbot.utils.ranking import RankingUtility


def test_ties_share_rank_and_skip_next():
    ranked = RankingUtility.competition_rank([10, 8, 10], key=lambda points: points)
    assert [rank for rank, _ in ranked] == [1, 1, 3]
    assert [points for _, points in ranked] == [10, 10, 8]


def test_ties_keep_input_order():
    items = [("a", 5), ("b", 7), ("c", 5), ("d", 5)]
    ranked = RankingUtility.competition_rank(items, key=lambda item: item[1])
    assert [(rank, name) for rank, (name, _) in ranked] == [(1, "b"), (2, "a"), (2, "c"), (2, "d")]


def test_distinct_scores_rank_by_position():
    ranked = RankingUtility.competition_rank([3, -1, 12, 0], key=lambda points: points)
    assert ranked == [(1, 12), (2, 3), (3, 0), (4, -1)]


def test_empty():
    assert RankingUtility.competition_rank([], key=lambda points: points) == []
