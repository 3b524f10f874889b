"""
RAT Server Test Suite
"""
