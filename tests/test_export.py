import csv
import json

from pathway_graph.build_graph import build_pathway_graph
from pathway_graph.export import export_csv, save_graph_json
from pathway_graph.schema import QueryRow

from conftest import row


def read_csv(path):
    with path.open(newline='', encoding='utf-8') as f:
        return list(csv.reader(f))


def test_save_graph_json(tmp_path):
    graph = build_pathway_graph([row('TP53', 'MDM2')], 'WP1')
    path = save_graph_json(graph, tmp_path / 'out')
    assert path.name == 'WP1.graph.json'
    data = json.loads(path.read_text(encoding='utf-8'))
    assert data['pathway_id'] == 'WP1'
    assert [n['id'] for n in data['nodes']] == ['TP53', 'MDM2']


def test_export_csv(tmp_path, store):
    grouped = QueryRow(
        source='uri:grp', source_label='AKT1 / AKT2', source_members=['n1', 'n2'],
        target='uri:MDM2', target_label='MDM2', interaction_type='Arrow',
    )
    g1 = build_pathway_graph([row('TP53', 'MDM2')], 'WP1', store=store)
    g2 = build_pathway_graph([grouped], 'WP2', store=store)
    export_csv([g1, g2], store, tmp_path)

    nodes = read_csv(tmp_path / 'nodes.csv')
    assert nodes[0] == ['id:ID', 'label', 'layer:int', 'pathway', 'members']
    assert ['AKT1', 'AKT1 / AKT2', '0', 'WP2', 'n1|n2'] in nodes
    assert ['TP53', 'TP53', '0', 'WP1', ''] in nodes

    rels = read_csv(tmp_path / 'relations.csv')
    assert rels[1:] == [['TP53', 'MDM2', '', '', 'WP1'], ['AKT1', 'MDM2', 'Arrow', '', 'WP2']]

    freq = {r[0]: r for r in read_csv(tmp_path / 'frequency.csv')[1:]}
    assert freq['MDM2'] == ['MDM2', '2', 'WP1|WP2']
    assert freq['TP53'] == ['TP53', '1', 'WP1']
