"""Membership System package.

Feature modules (organizations, clients, packages, attendance, reports) with a
thin Flask controller layer over service/repository layers. The package
lifecycle rules live in ``lifecycle``.
"""
