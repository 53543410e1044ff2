"""
Rooftop PV yield engine.

Pure, synchronous computation of monthly plane-of-array irradiation,
system size and bill savings.  The ``weather`` and ``insights`` subpackages
hold the async clients for the external data providers; nothing in the
computation path imports them.
"""
