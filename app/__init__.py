"""Club registration web service"""
