"""
Kahva - commit graph log rendering
"""
