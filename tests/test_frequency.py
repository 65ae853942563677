from pathway_graph.build_graph import build_pathway_graph
from pathway_graph.frequency import FrequencyStore

from conftest import row


def test_count_is_number_of_distinct_pathways(store):
    store.record_many(['A', 'B'], 'P1')
    store.mark_loaded('P1')
    store.record_many(['B', 'C'], 'P2')
    store.mark_loaded('P2')
    assert store.get('B').count == 2
    assert store.get('A').count == 1
    assert store.get('C').pathways_seen == {'P2'}
    assert store.get('missing') is None


def test_repeated_mentions_within_a_pathway_count_once(store):
    for _ in range(3):
        store.record('TP53', 'P1')
    assert store.get('TP53').count == 1


def test_loaded_pathway_is_not_recorded_again(store):
    store.record('TP53', 'P1')
    store.mark_loaded('P1')
    store.record('MDM2', 'P1')
    assert store.is_loaded('P1')
    assert store.get('MDM2') is None
    assert len(store) == 1


def test_rebuilding_a_pathway_leaves_counts_unchanged(store):
    rows = [row('TP53', 'MDM2'), row('MDM2', 'EGFR')]
    build_pathway_graph(rows, 'WP1', store=store)
    before = {k: r.count for k, r in store.records.items()}
    build_pathway_graph(rows + [row('EGFR', 'KRAS')], 'WP1', store=store)
    assert {k: r.count for k, r in store.records.items()} == before
    assert 'KRAS' not in store.records


def test_counts_accumulate_across_built_pathways(store):
    build_pathway_graph([row('TP53', 'MDM2')], 'WP1', store=store)
    build_pathway_graph([row('MDM2', 'EGFR')], 'WP2', store=store)
    assert store.get('MDM2').count == 2
    assert store.get('TP53').count == 1
    assert store.loaded_pathways == {'WP1', 'WP2'}


def test_reset_clears_records_and_loaded_pathways(store):
    store.record('TP53', 'P1')
    store.mark_loaded('P1')
    store.reset()
    assert len(store) == 0
    assert not store.is_loaded('P1')
    store.record('TP53', 'P1')
    assert store.get('TP53').count == 1


def test_as_table_marks_each_pathway_seen():
    s = FrequencyStore()
    s.record('TP53', 'WP2')
    s.record('TP53', 'WP1')
    s.record('EGFR', 'WP2')
    assert s.as_table() == [
        {'gene': 'TP53', 'WP1': 1, 'WP2': 1},
        {'gene': 'EGFR', 'WP2': 1},
    ]
