"""
Variable-Area Resistor Experiment
=================================
A resistive bar whose cross-section A(x) follows a hidden profile is driven by
a current source. A probe reads a noisy voltage at position x and the user
tries to infer A(x) from the logged readings.

Layers:
    model: PRNG, area profiles, measurement log and the experiment session.
    analysis: resistance integration and voltage/noise synthesis.
    view: the pure frame renderer and the Qt front-end.
"""
__version__ = "0.1.0"
