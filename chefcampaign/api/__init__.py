"""
HTTP interface for the campaign pipeline.
"""

from chefcampaign.api.app import create_app
