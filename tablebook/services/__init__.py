"""Engine services"""
