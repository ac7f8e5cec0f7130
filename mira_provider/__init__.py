"""Terraform-style provider glue and client for the MIRA IPAM service."""

__version__ = "0.1.0"
