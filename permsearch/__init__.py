"""
permsearch - find filesystem entries whose owner, group or permissions break a policy.
"""

from permsearch.branding import VERSION

__version__ = VERSION
