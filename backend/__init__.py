"""HTTP service for the dispatcher"""
