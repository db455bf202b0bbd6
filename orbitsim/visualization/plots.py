import os
import matplotlib.pyplot as plt
from orbitsim.config import settings


def plot_trails(fleet, filename="trails.png"):
    """
    Plot each satellite's recent trail in the orbital (x-y) plane, in km.
    """
    os.makedirs(settings.OUTPUT_DIR, exist_ok=True)

    fig, ax = plt.subplots(figsize=(8, 8))
    body = plt.Circle((0.0, 0.0), settings.EARTH_RADIUS / 1000.0, color="tab:blue", alpha=0.3)
    ax.add_patch(body)

    for index, sat in enumerate(fleet):
        if len(sat.trail) == 0:
            continue
        xs = [p[0] / 1000.0 for p in sat.trail]
        ys = [p[1] / 1000.0 for p in sat.trail]
        label = f"{sat.name} ({fleet.status(index)})"
        ax.plot(xs, ys, label=label)
        ax.plot(xs[-1], ys[-1], "x" if sat.crashed else "o", color="black", markersize=5)

    ax.set_aspect("equal")
    ax.set_xlabel("x (km)")
    ax.set_ylabel("y (km)")
    ax.set_title("Satellite Trails")

    if len(fleet) <= 10:
        ax.legend()
    else:
        ax.legend(fontsize=8, ncol=2)

    save_path = os.path.join(settings.OUTPUT_DIR, filename)
    fig.tight_layout()
    fig.savefig(save_path)
    plt.close(fig)

    print(f"[OK] Saved: {save_path}")
    return save_path


def plot_altitude_history(times, altitudes, names, filename="altitude_history.png"):
    """
    Altitude (km) vs simulated time for each satellite.
    altitudes: one list per satellite, aligned with `times`.
    """
    os.makedirs(settings.OUTPUT_DIR, exist_ok=True)

    plt.figure(figsize=(10, 6))
    for name, series in zip(names, altitudes):
        plt.plot(times[:len(series)], [a / 1000.0 for a in series], label=name)

    plt.xlabel("Wall-clock Time (s)")
    plt.ylabel("Altitude (km)")
    plt.title("Altitude Over Time")
    plt.axhline(settings.CRASH_ALTITUDE / 1000.0, color="red", linestyle="--", alpha=0.5)

    if len(names) <= 10:
        plt.legend()
    else:
        plt.legend(fontsize=8, ncol=2)

    save_path = os.path.join(settings.OUTPUT_DIR, filename)
    plt.tight_layout()
    plt.savefig(save_path)
    plt.close()

    print(f"[OK] Saved: {save_path}")
    return save_path
