"""
Campaign pipeline.

Runs a brief through concept generation and concurrent image rendering.
"""

from chefcampaign.pipeline.pipeline_runner import CampaignPipeline, render_variants
