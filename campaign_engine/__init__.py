"""
campaign_engine — Chart classification engine for ad-campaign analytics.

Submodules:
    - config: Environment-driven settings and logging setup
    - processors: Source-specific data pipelines
        - campaign_charts: Metric bag -> validated, categorised chart specs
"""
