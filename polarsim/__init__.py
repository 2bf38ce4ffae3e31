"""
polarsim: continuous full-envelope 6-DOF flight dynamics for canopies,
wingsuits and skydivers.

Subpackages:
- aero:        continuous polars, Kirchhoff separation, segment forces
- core:        state, frames, equations of motion, mass properties
- environment: standard atmosphere
- vehicles:    polar library, Ibex UL canopy, A5 wingsuit
- io:          YAML simulation configuration
- simulation:  simulation runner and glide trim
"""

__version__ = "0.1.0"
