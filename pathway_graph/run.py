"""Build one or more WikiPathways graphs in sequence and export them.

Example:
python -m pathway_graph.run --pathway WP17 --pathway WP3855 --out pathway_export
"""
from __future__ import annotations
import argparse
import json
import logging
from pathlib import Path

from . import config
from .errors import PathwayFetchError
from .export import export_csv, save_graph_json, save_json
from .fetch import fetch_gene_products
from .pipeline import GraphSession


def run_pathways(session: GraphSession, pathway_ids, out_dir: Path, gene_products: bool = False):
    graphs = []
    for pid in pathway_ids:
        iri_map = None
        if gene_products:
            try:
                iri_map = fetch_gene_products(pid)
            except (ValueError, PathwayFetchError) as e:
                print(f"[WARN] {pid}: gene products unavailable ({e}); using interaction URIs")
        try:
            graph = session.build_sync(pid, iri_map)
        except (ValueError, PathwayFetchError) as e:
            print(f"[ERROR] {pid}: {e}")
            continue
        path = save_graph_json(graph, out_dir)
        st = graph.stats
        print(f"[INFO] {graph.pathway_id} ({graph.title or 'untitled'}): nodes={st['nodes']} links={st['links']} "
              f"layers={st['layers']} skipped_interactions={st.get('skipped_interactions', 0)} -> {path}")
        graphs.append(graph)
    export_csv(graphs, session.store, out_dir)
    save_json(session.store.as_table(), out_dir / 'frequency.json')
    print(f"[SUMMARY] pathways={len(graphs)} tracked_nodes={len(session.store)}")
    return graphs


def main():
    p = argparse.ArgumentParser()
    p.add_argument('--pathway', action='append', dest='pathways', help='WikiPathways id (repeatable), e.g. WP17')
    p.add_argument('--out', type=Path, default=Path('pathway_export'))
    p.add_argument('--min-overlap', type=int, default=None, help=f'Prefix merge threshold (default {config.MIN_OVERLAP})')
    p.add_argument('--gene-products', action='store_true', help='Link table rows to gene-product IRIs')
    p.add_argument('--no-custom-edges', action='store_true')
    p.add_argument('-v', '--verbose', action='store_true')
    args = p.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    session = GraphSession(
        min_overlap=args.min_overlap,
        custom_edges={} if args.no_custom_edges else None,
    )
    graphs = run_pathways(session, args.pathways or [config.CONFIG['default_pathway']], args.out, args.gene_products)
    print(json.dumps({'graphs': [g.pathway_id for g in graphs], 'out': str(args.out)}))


if __name__ == '__main__':
    main()
