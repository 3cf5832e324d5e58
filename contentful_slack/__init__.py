"""contentful-slack - Contentful webhook to Slack notification adapter"""
__version__ = "0.1.0"
