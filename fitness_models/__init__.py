"""Calorie and energy-expenditure calculations"""
