# tests/test_clusters.py
from perception.clusters import build_clusters

def test_disjoint_regions_make_two_clusters(bright_mask):
    a = [(1, 1), (2, 1), (3, 1)]
    b = [(10, 10), (10, 11)]
    clusters = build_clusters(bright_mask(a + b))
    assert len(clusters) == 2
    assert sorted(map(sorted, (c.cells for c in clusters))) == sorted([sorted(a), sorted(b)])

def test_bottleneck_region_is_one_cluster(bright_mask):
    left = [(x, y) for x in range(2, 5) for y in range(2, 5)]
    right = [(x, y) for x in range(6, 9) for y in range(2, 5)]
    neck = [(5, 3)]
    clusters = build_clusters(bright_mask(left + neck + right))
    assert len(clusters) == 1
    assert len(clusters[0]) == 19

def test_diagonal_contact_does_not_connect(bright_mask):
    clusters = build_clusters(bright_mask([(4, 4), (5, 5)]))
    assert len(clusters) == 2

def test_every_bright_cell_in_exactly_one_cluster(bright_mask):
    cells = [(0, 0), (1, 0), (27, 27), (26, 27), (13, 5), (13, 6), (14, 6), (20, 1)]
    clusters = build_clusters(bright_mask(cells))
    seen = [c for cl in clusters for c in cl.cells]
    assert sorted(seen) == sorted(cells)
    for cl in clusters:
        assert cl.members == set(cl.cells)

def test_clusters_are_seeded_in_row_major_order(bright_mask):
    clusters = build_clusters(bright_mask([(20, 9), (3, 2), (8, 2)]))
    assert [cl.cells[0] for cl in clusters] == [(3, 2), (8, 2), (20, 9)]

def test_no_bright_cells(bright_mask):
    assert build_clusters(bright_mask([])) == []
