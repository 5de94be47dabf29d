"""
resumate - Role-targeted resume bullet selection

Picks a bounded, diverse set of achievement bullets from a full career history
(Company -> Position -> Bullet) for a target role profile.

Architecture:
- Intake Context: Resume data model, loading, and structural validation
- Targeting Context: Hierarchical scoring and diversity-constrained selection
"""

__version__ = "0.1.0"
