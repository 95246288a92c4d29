"""
Entry point for ``python -m chefcampaign``.
"""

from chefcampaign.cli import main

if __name__ == '__main__':
    main()
