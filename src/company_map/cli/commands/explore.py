"""
Explore command for company-map CLI.
"""

import sys
from pathlib import Path

import click

from ...session import InvestigationSession
from ...shared.exceptions import CompanyMapError, StaleGraphError
from ...shared.logging import ProgressLogger
from ...shared.models import API_KEY_ENV_VAR, ExplorationConfig, LayoutDirection
from ...shared.output import OutputManager
from ...visualization.export import write_payload
from ..utils import get_output_manager_from_context, get_registry_from_context


@click.command()
@click.argument("query")
@click.option(
    "--expand",
    "-e",
    "expand_ids",
    multiple=True,
    help="Node id to expand after loading (repeatable, applied in order)",
)
@click.option(
    "--levels",
    "-l",
    type=click.IntRange(1, 3),
    default=1,
    show_default=True,
    help="Expansion depth for each --expand",
)
@click.option(
    "--direction",
    "-d",
    type=click.Choice([d.value for d in LayoutDirection], case_sensitive=False),
    default=LayoutDirection.TB.value,
    show_default=True,
    help="Layout direction",
)
@click.option("--highlight", "highlight_id", help="Node id to emphasize in the exported map")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output JSON path (default: outputs/maps/)",
)
@click.option(
    "--overwrite",
    is_flag=True,
    help="Write to a fixed filename under outputs/maps/ instead of a timestamped one",
)
@click.option(
    "--workers",
    type=click.IntRange(1, 32),
    default=8,
    show_default=True,
    help="Concurrent fetches per level",
)
@click.option("--api-key", envvar=API_KEY_ENV_VAR, help="Companies House API key")
@click.pass_context
def explore(
    ctx, query, expand_ids, levels, direction, highlight_id, output, overwrite, workers, api_key
):
    """Build an investigation map for a company number or name and export it as JSON."""
    logger = ctx.obj["logger"]
    out = get_output_manager_from_context(ctx)

    try:
        registry = get_registry_from_context(ctx, api_key)
        config = ExplorationConfig(max_workers=workers, direction=LayoutDirection.parse(direction))
        progress = ProgressLogger(logger)

        with InvestigationSession(registry, config) as session:
            progress.begin(f"Investigation of '{query}'", 1 + len(expand_ids))

            graph = session.start(query)
            progress.step(f"Loaded {session.root_id}: {len(graph.nodes)} nodes")

            for node_id in expand_ids:
                try:
                    graph = session.expand(node_id, levels)
                except StaleGraphError:
                    raise
                except CompanyMapError as e:
                    progress.step(f"Expand {node_id}: {e.message}", ok=False)
                    continue

                report = session.last_report
                progress.step(
                    f"Expanded {node_id}: +{report.nodes_added} nodes, +{report.edges_added} edges"
                )
                for failed_id, reason in report.failed.items():
                    out.warning(f"No data for {failed_id} this round: {reason}")

            if highlight_id:
                session.select(highlight_id)

            progress.finish()

            output_path = output or OutputManager().get_map_path(
                query, session.direction.value, overwrite=overwrite
            )
            write_payload(session.to_payload(), output_path)
            stats = session.graph.get_statistics()
            emphasized = len(session.emphasis().emphasized_nodes())

        out.success(f"Map saved: {output_path}")
        out.final_results(
            f"Nodes: {stats['nodes']} (companies {stats['company']}, officers {stats['officer']}, "
            f"PSCs {stats['psc']}, addresses {stats['address']}), edges: {stats['edges']}"
        )
        if highlight_id:
            out.info(f"Emphasized {emphasized} nodes connected to {highlight_id}")
        logger.info(f"Investigation of '{query}' exported to {output_path}")

    except CompanyMapError as e:
        logger.error(f"Investigation failed: {e}")
        out.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        out.error(f"Unexpected error: {e}")
        sys.exit(1)
