import pytest

from pathway_graph.frequency import FrequencyStore
from pathway_graph.schema import QueryRow

GPML_GROUPED = """<?xml version="1.0" encoding="UTF-8"?>
<Pathway xmlns="http://pathvisio.org/GPML/2013a" Name="Test signaling">
  <DataNode TextLabel="AKT1" GraphId="n1" Type="GeneProduct" GroupRef="g1">
    <Xref Database="Entrez Gene" ID="207" />
  </DataNode>
  <DataNode TextLabel="AKT2" GraphId="n2" Type="GeneProduct" GroupRef="g1">
    <Xref Database="Entrez Gene" ID="208" />
  </DataNode>
  <DataNode TextLabel="MTOR" GraphId="n3" Type="GeneProduct">
    <Xref Database="Entrez Gene" ID="2475" />
  </DataNode>
  <DataNode TextLabel="PDK1" GraphId="n4" Type="GeneProduct">
    <Xref Database="" ID="" />
  </DataNode>
  <Interaction GraphId="i1">
    <Graphics>
      <Point X="1" Y="1" GraphRef="n1" />
      <Point X="2" Y="2" GraphRef="n3" ArrowHead="Arrow" />
    </Graphics>
  </Interaction>
  <Interaction GraphId="i2">
    <Graphics>
      <Point X="1" Y="1" GraphRef="n4" />
      <Point X="2" Y="2" GraphRef="G1" ArrowHead="mim-stimulation" />
    </Graphics>
  </Interaction>
  <Interaction GraphId="i3">
    <Graphics>
      <Point X="1" Y="1" GraphRef="n3" />
      <Point X="2" Y="2" GraphRef="missing" ArrowHead="Arrow" />
    </Graphics>
  </Interaction>
  <Interaction>
    <Graphics>
      <Point X="1" Y="1" GraphRef="n3" />
      <Point X="2" Y="2" />
    </Graphics>
  </Interaction>
  <Group GroupId="g1" GraphId="G1" Style="Complex" />
</Pathway>
"""


def binding(source, source_label, target, target_label, **extra):
    row = {
        'source': {'type': 'uri', 'value': source},
        'target': {'type': 'uri', 'value': target},
    }
    if source_label is not None:
        row['sourceLabel'] = {'type': 'literal', 'value': source_label}
    if target_label is not None:
        row['targetLabel'] = {'type': 'literal', 'value': target_label}
    for k, v in extra.items():
        row[k] = {'type': 'literal', 'value': v}
    return row


def row(source_label, target_label, source=None, target=None, **extra):
    return QueryRow(
        source=source or f'uri:{source_label}',
        source_label=source_label,
        target=target or f'uri:{target_label}',
        target_label=target_label,
        **extra,
    )


@pytest.fixture
def gpml_grouped():
    return GPML_GROUPED


@pytest.fixture
def store():
    return FrequencyStore()


@pytest.fixture
def sparql_bindings():
    return [
        binding('http://ex/PIK3CA', 'PIK3CA', 'http://ex/PIP3', 'PIP3',
                pathwayTitle='Test signaling', interactionType='DirectedInteraction'),
        binding('http://ex/PIP3', 'PIP3', 'http://ex/MTOR', 'MTOR'),
        binding('http://ex/PIP3', 'PIP3 (dup)', 'http://ex/MTOR', 'mTOR'),
    ]
