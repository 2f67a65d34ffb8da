# tests/test_identify.py
from core.interfaces import Cluster
from perception.identify import identify_snake

CENTER = (14, 14)

def test_largest_overlap_wins():
    a = Cluster([(1, 1), (2, 1)])
    b = Cluster([(5, 5), (6, 5), (7, 5)])
    prev = {(5, 5), (6, 5), (1, 1)}
    assert identify_snake([a, b], prev, CENTER) is b

def test_equal_overlap_keeps_first_cluster():
    a = Cluster([(1, 1), (2, 1)])
    b = Cluster([(5, 5), (6, 5)])
    prev = {(1, 1), (5, 5)}
    assert identify_snake([a, b], prev, CENTER) is a
    assert identify_snake([b, a], prev, CENTER) is b

def test_spawn_cell_without_history():
    big = Cluster([(1, 1), (2, 1), (3, 1), (4, 1)])
    spawn = Cluster([CENTER])
    assert identify_snake([big, spawn], set(), CENTER) is spawn

def test_largest_cluster_fallback():
    small = Cluster([(1, 1)])
    big = Cluster([(5, 5), (6, 5), (7, 5)])
    assert identify_snake([small, big], set(), CENTER) is big

def test_no_clusters():
    assert identify_snake([], {(1, 1)}, CENTER) is None

def test_moved_single_cell_snake_follows_predicted_head():
    food = Cluster([(5, 14)])
    snake = Cluster([(13, 14)])
    prev = {(14, 14)}
    assert identify_snake([food, snake], prev, CENTER, expected_head=(13, 14), prev_head=(14, 14)) is snake

def test_zero_overlap_uses_cell_next_to_previous_head():
    food = Cluster([(2, 3)])
    snake = Cluster([(9, 8)])
    assert identify_snake([food, snake], {(9, 9)}, CENTER, prev_head=(9, 9)) is snake

def test_zero_overlap_without_evidence_falls_back_to_largest():
    small = Cluster([(1, 1)])
    big = Cluster([(5, 5), (6, 5)])
    assert identify_snake([small, big], {(20, 20)}, CENTER) is big
