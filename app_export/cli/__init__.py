"""Command line interface for app-export-tool"""
