import xml.etree.ElementTree as ET

import pytest

from pathway_graph.gpml import build_groups, collapse_groups, parse_gpml, xref_uri

AKT_GROUP_URI = 'https://identifiers.org/entrez gene/207 | https://identifiers.org/entrez gene/208'


def test_parse_gpml_reads_nodes_groups_and_interactions(gpml_grouped):
    doc = parse_gpml(gpml_grouped)
    assert doc.title == 'Test signaling'
    assert list(doc.nodes) == ['n1', 'n2', 'n3', 'n4']
    assert doc.nodes['n1'].group_ref == 'g1'
    assert doc.nodes['n3'].uri == 'https://identifiers.org/entrez gene/2475'
    assert doc.nodes['n4'].uri is None
    assert doc.group_declarations == [('g1', 'G1')]
    assert [i.id for i in doc.interactions] == ['i1', 'i2', 'i3', 'interaction_3']
    assert doc.interactions[0].point_refs == ['n1', 'n3']
    assert doc.interactions[0].arrow_heads == [None, 'Arrow']


def test_parse_gpml_assigns_ids_to_anonymous_nodes():
    doc = parse_gpml('<Pathway><DataNode TextLabel="TP53"/><DataNode/></Pathway>')
    assert list(doc.nodes) == ['auto_0', 'auto_1']
    assert doc.nodes['auto_0'].label == 'TP53'
    assert doc.nodes['auto_1'].label == 'auto_1'


def test_parse_gpml_rejects_invalid_xml():
    with pytest.raises(ET.ParseError):
        parse_gpml('<Pathway><DataNode></Pathway>')


def test_xref_uri():
    assert xref_uri('Ensembl', 'ENSG0001') == 'https://identifiers.org/ensembl/ENSG0001'
    assert xref_uri('', '42') is None
    assert xref_uri('Entrez Gene', None) is None


def test_build_groups_renames_to_graph_id(gpml_grouped):
    groups = build_groups(parse_gpml(gpml_grouped))
    g = groups['g1']
    assert g.id == 'G1'
    assert g.member_ids == ['n1', 'n2']
    assert g.label == 'AKT1 / AKT2'
    assert g.uri == AKT_GROUP_URI


def test_group_without_declaration_keeps_group_ref():
    doc = parse_gpml(
        '<Pathway>'
        '<DataNode GraphId="a" TextLabel="TP53" GroupRef="grp"/>'
        '<DataNode GraphId="b" TextLabel="MDM2" GroupRef="grp"/>'
        '</Pathway>'
    )
    groups = build_groups(doc)
    assert groups['grp'].id == 'grp'
    assert groups['grp'].uri is None


def test_grouped_member_endpoint_is_redirected_to_group(gpml_grouped):
    result = collapse_groups(parse_gpml(gpml_grouped), 'WP17')
    assert result.endpoints == [('G1', 'n3'), ('n4', 'G1')]
    first = result.rows[0]
    assert first.source == AKT_GROUP_URI
    assert first.source_label == 'AKT1 / AKT2'
    assert first.source_type == 'Group'
    assert first.source_members == ['n1', 'n2']
    assert first.target_label == 'MTOR'
    assert first.target_members is None
    assert first.interaction_type == 'Arrow'
    assert first.pathway_title == 'Test signaling'
    assert first.interaction == 'http://rdf.wikipathways.org/Pathway/WP17_r0/WP/Interaction/i1'


def test_node_without_xref_uses_its_id(gpml_grouped):
    result = collapse_groups(parse_gpml(gpml_grouped), 'WP17', revision=5)
    second = result.rows[1]
    assert second.source == 'n4'
    assert second.source_label == 'PDK1'
    assert second.target_members == ['n1', 'n2']
    assert second.interaction.endswith('WP17_r5/WP/Interaction/i2')


def test_unresolved_and_incomplete_interactions_are_counted(gpml_grouped):
    result = collapse_groups(parse_gpml(gpml_grouped), 'WP17')
    assert len(result.rows) == 2
    assert result.skipped == 1
    assert result.incomplete == 1
