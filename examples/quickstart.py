"""tleprop Quickstart — parse a TLE and propagate it to a state vector."""

from datetime import timedelta

from tleprop import TwoLineElement, propagate_to

# ISS (ZARYA) TLE
tle_text = """
ISS (ZARYA)
1 25544U 98067A   20148.21301450  .00001715  00000-0  38778-4 0  9992
2 25544  51.6435  92.2789 0002570 358.0648 144.9972 15.49396855228767
""".strip()

# Parse it
iss = TwoLineElement.from_text(tle_text)

print(f"Satellite: {iss.name}")
print(f"NORAD ID:  {iss.norad_id}")
print(f"Epoch:     {iss.epoch}")
print(f"Incl:      {iss.inclination_deg:.4f}°")
print(f"Period:    {1440 / iss.mean_motion_rev_per_day:.1f} min")

# Propagate one orbit ahead, TEME frame
state = propagate_to(iss, iss.epoch + timedelta(minutes=92))
print(f"r [km]:    {state.position_km}")
print(f"v [km/s]:  {state.velocity_km_s}")
