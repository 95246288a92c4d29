"""
Command-line interface for the chefcampaign package.

This module provides the CLI commands for the chefcampaign package:
- generate: Generate a campaign batch from a restaurant brief
- edit: Apply an AI edit to a single image
- scan: Detect text regions in an image
- serve: Run the HTTP API
"""

import sys
import json
import click
from typing import Optional, Dict, Any

from chefcampaign import __version__
from chefcampaign.core.config import get_config_value
from chefcampaign.core.constants import TEXT_POSITIONS, SUPPORTED_IMAGE_MODELS
from chefcampaign.core.logging_config import get_logger, configure_logging

# Initialize logger
logger = get_logger(__name__)


def _write_output(data: Any, output: Optional[str]) -> None:
    text = json.dumps(data, indent=2) if not isinstance(data, str) else data
    if output:
        with open(output, 'w') as f:
            f.write(text)
        click.echo(f"Output saved to: {output}")
    else:
        click.echo(text)


def _fail(action: str, error: Exception) -> None:
    logger.error(f"Error {action}: {str(error)}")
    click.echo(f"Error {action}: {str(error)}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
def main():
    """
    chefcampaign - Marketing campaign generator for home restaurants.

    Drafts social media campaign concepts from a restaurant brief and renders
    an image for each one.
    """
    # stdout carries the command output, so logs go to stderr
    configure_logging(stream=sys.stderr)


@main.command()
@click.option('--brand-name', required=True, help='Restaurant brand name')
@click.option('--cuisine-type', required=True, help='Cuisine type, e.g. "Italian"')
@click.option('--star-dish', default='', help='Signature dish')
@click.option('--city', default='', help='City the restaurant serves')
@click.option('--menu-highlights', default='', help='Other dishes worth mentioning')
@click.option('--text-position', type=click.Choice(TEXT_POSITIONS), help='Preferred text position on the image')
@click.option('--primary-color', help='Preferred primary color')
@click.option('--atmosphere', help='Desired atmosphere, e.g. "cozy"')
@click.option('--image-model', type=click.Choice(SUPPORTED_IMAGE_MODELS),
              help='Image backend (default: image_generation.default_model)')
@click.option('-o', '--output', type=click.Path(dir_okay=False, writable=True),
              help='Write the batch JSON to this file instead of stdout')
def generate(brand_name: str, cuisine_type: str, star_dish: str, city: str, menu_highlights: str,
             text_position: Optional[str] = None, primary_color: Optional[str] = None,
             atmosphere: Optional[str] = None, image_model: Optional[str] = None,
             output: Optional[str] = None):
    """
    Generate a campaign batch from a restaurant brief.

    Examples:
      chefcampaign generate --brand-name "Mama's Kitchen" --cuisine-type Italian
      chefcampaign generate --brand-name "Mama's Kitchen" --cuisine-type Italian --image-model gemini -o batch.json
    """
    from chefcampaign.models import batch_to_dict
    from chefcampaign.pipeline.pipeline_runner import CampaignPipeline

    chef_data: Dict[str, Any] = {
        "brandName": brand_name,
        "cuisineType": cuisine_type,
        "starDish": star_dish,
        "city": city,
        "menuHighlights": menu_highlights,
    }
    style = {
        "textPosition": text_position,
        "primaryColor": primary_color,
        "atmosphere": atmosphere,
    }
    style = {key: value for key, value in style.items() if value}
    if style:
        chef_data["style"] = style

    try:
        variants = CampaignPipeline().generate_campaign(chef_data, image_model)
    except Exception as e:
        _fail("generating campaign", e)
        return

    completed = sum(1 for variant in variants if variant.image_url)
    logger.info(f"Generated {len(variants)} variants ({completed} with images)")
    _write_output(batch_to_dict(variants), output)


@main.command()
@click.argument('image_ref')
@click.option('-p', '--prompt', required=True, help='Edit instruction')
@click.option('-o', '--output', type=click.Path(dir_okay=False, writable=True),
              help='Write the edited image reference to this file instead of stdout')
def edit(image_ref: str, prompt: str, output: Optional[str] = None):
    """
    Apply an AI edit to a single image.

    IMAGE_REF: Image URL or data URL
    """
    from chefcampaign.pipeline.pipeline_runner import CampaignPipeline

    try:
        image_url = CampaignPipeline().edit_image(image_ref, prompt)
    except Exception as e:
        _fail("editing image", e)
        return

    _write_output(image_url, output)


@main.command()
@click.argument('image_ref')
def scan(image_ref: str):
    """
    Detect text regions in an image with the OCR service.

    IMAGE_REF: Image URL or data URL
    """
    from chefcampaign.pipeline.pipeline_runner import CampaignPipeline

    try:
        regions = CampaignPipeline().scan_text(image_ref)
    except Exception as e:
        _fail("scanning image", e)
        return

    _write_output({"regions": [region.to_dict() for region in regions]}, None)


@main.command()
@click.option('--host', help='Bind address (default: server.host)')
@click.option('--port', type=int, help='Port (default: server.port)')
def serve(host: Optional[str] = None, port: Optional[int] = None):
    """
    Run the HTTP API.
    """
    import uvicorn

    host = host or get_config_value("server.host", "0.0.0.0")
    port = port or get_config_value("server.port", 8000)
    logger.info(f"Starting server on {host}:{port}")
    uvicorn.run("chefcampaign.api.app:create_app", factory=True, host=host, port=port)


if __name__ == '__main__':
    main()
