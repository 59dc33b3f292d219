"""Restaurant table availability and booking engine"""
