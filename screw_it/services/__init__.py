"""Application services for the screw-it CLI.

Services implement the release workflow, coordinating between the core
types (core/) and the external tool adapters (git/, npm/).
"""
