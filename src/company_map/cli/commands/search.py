"""
Search command for company-map CLI.
"""

import sys

import click

from ...shared.exceptions import CompanyMapError
from ...shared.formatting import display_value, format_date
from ...shared.models import API_KEY_ENV_VAR
from ..utils import get_output_manager_from_context, get_registry_from_context


@click.command()
@click.argument("query")
@click.option("--api-key", envvar=API_KEY_ENV_VAR, help="Companies House API key")
@click.pass_context
def search(ctx, query, api_key):
    """Search companies by name and list the matches."""
    logger = ctx.obj["logger"]
    output = get_output_manager_from_context(ctx)

    try:
        registry = get_registry_from_context(ctx, api_key)
        hits = registry.search_companies_by_name(query)

        if not hits:
            output.warning(f"No companies found for '{query}'")
            return

        rows = [
            (
                display_value(hit.company_number),
                display_value(hit.company_name),
                display_value(hit.company_status),
                format_date(hit.date_of_creation),
            )
            for hit in hits
        ]
        columns = ["Number", "Name", "Status", "Incorporated"]
        output.table(f"Companies matching '{query}'", columns, rows)
        logger.debug(f"Search for '{query}' returned {len(hits)} companies")

    except CompanyMapError as e:
        logger.error(f"Search failed: {e}")
        output.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        output.error(f"Unexpected error: {e}")
        sys.exit(1)
