"""
AVL Tree Demo -- Rotation cases, height growth against the AVL bound, rotation
mix per insertion order, and balance factor distribution.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import sys
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))
from avl_tree import AVLTree

SEED = 42
np.random.seed(SEED)

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

COLORS = {
    "blue": "#3498db",
    "red": "#e74c3c",
    "orange": "#f39c12",
    "green": "#27ae60",
    "purple": "#9b59b6",
    "dark": "#2c3e50",
}

ROTATION_CASES = [
    ("Right-Right", [10, 20, 30], "right_right"),
    ("Left-Left", [30, 20, 10], "left_left"),
    ("Left-Right", [30, 10, 20], "left_right"),
    ("Right-Left", [10, 30, 20], "right_left"),
]

HEIGHT_SIZES = [2 ** k for k in range(1, 13)]
RANDOM_TRIALS = 5


def build_tree(values):
    tree = AVLTree()
    for v in values:
        tree.insert(int(v))
    return tree


def avl_upper_bound(n):
    return 1.45 * np.log2(np.asarray(n) + 2) - 1.33


def draw_tree(ax, tree, title):
    """Lay nodes out by in-order rank (x) and depth (y)."""
    positions = {}

    def place(node, depth, rank):
        if node is None:
            return rank
        rank = place(node.left, depth + 1, rank)
        positions[id(node)] = (rank, -depth, node)
        rank += 1
        return place(node.right, depth + 1, rank)

    place(tree.root, 0, 0)

    for x, y, node in positions.values():
        for child in (node.left, node.right):
            if child is not None:
                cx, cy, _ = positions[id(child)]
                ax.plot([x, cx], [y, cy], color=COLORS["dark"], linewidth=1.5, zorder=1)
    for x, y, node in positions.values():
        ax.scatter([x], [y], s=900, color=COLORS["blue"], edgecolor="white", zorder=2)
        ax.text(x, y, str(node.value), ha="center", va="center", fontsize=9,
                color="white", fontweight="bold", zorder=3)
        ax.text(x, y - 0.3, f"{node.metadata}", ha="center", va="top", fontsize=7,
                color="gray", zorder=3)

    ax.set_title(title, fontsize=10, fontweight="bold")
    ax.set_xlim(-1, max(len(positions), 1))
    ax.set_ylim(-tree.height() - 1, 0.7)
    ax.axis("off")


# ---------------------------------------------------------------------------
# Example 1: Rotation Cases
# ---------------------------------------------------------------------------
def example_1_rotation_cases():
    """Each of the four imbalance cases collapses to the same balanced shape."""
    print("=" * 60)
    print("Example 1: Rotation Cases")
    print("=" * 60)

    fig, axes = plt.subplots(1, len(ROTATION_CASES), figsize=(16, 4))

    for ax, (name, order, case) in zip(axes, ROTATION_CASES):
        tree = build_tree(order)
        counts = tree.rotation_counts()
        assert counts[case] == 1, f"{name} did not trigger its rotation"
        assert tree.root.value == 20 and tree.root.metadata == (1, 1)

        print(f"\n  {name}: insert {order}")
        print(f"    Root: {tree.root.value}, metadata {tree.root.metadata}")
        print(f"    Rotations: {counts}")
        draw_tree(ax, tree, f"{name}\ninsert {order}")

    fig.suptitle("AVL Tree: The Four Rotation Cases", fontsize=14, fontweight="bold", y=1.02)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_rotation_cases.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: viz/01_rotation_cases.png")


# ---------------------------------------------------------------------------
# Example 2: Height Growth
# ---------------------------------------------------------------------------
def example_2_height_growth():
    """Tree height for ascending, descending and random insertion orders."""
    print("\n" + "=" * 60)
    print("Example 2: Height Growth vs. AVL Bound")
    print("=" * 60)

    ascending = []
    descending = []
    random_mean = []
    random_max = []

    print(f"\n  {'n':>6} {'Ascending':>10} {'Descending':>11} {'Random':>8} {'Bound':>8}")
    print(f"  {'-'*47}")

    for n in HEIGHT_SIZES:
        ascending.append(build_tree(range(n)).height())
        descending.append(build_tree(range(n, 0, -1)).height())
        heights = [build_tree(np.random.permutation(n)).height() for _ in range(RANDOM_TRIALS)]
        random_mean.append(np.mean(heights))
        random_max.append(max(heights))
        print(f"  {n:>6} {ascending[-1]:>10} {descending[-1]:>11} "
              f"{random_mean[-1]:>8.2f} {avl_upper_bound(n):>8.2f}")

    sizes = np.array(HEIGHT_SIZES)
    assert np.all(np.array(random_max) <= avl_upper_bound(sizes))
    assert np.all(np.array(ascending) <= avl_upper_bound(sizes))

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(sizes, ascending, "o-", color=COLORS["blue"], linewidth=2, label="Ascending")
    ax.plot(sizes, descending, "s--", color=COLORS["purple"], linewidth=2, label="Descending")
    ax.plot(sizes, random_mean, "^-", color=COLORS["green"], linewidth=2,
            label=f"Random (mean of {RANDOM_TRIALS})")
    ax.plot(sizes, avl_upper_bound(sizes), color=COLORS["red"], linewidth=2,
            label="AVL bound 1.45 log2(n+2) - 1.33")
    ax.plot(sizes, np.floor(np.log2(sizes)), color=COLORS["orange"], linewidth=2,
            linestyle=":", label="Perfect tree floor(log2 n)")
    ax.set_xscale("log", base=2)
    ax.set_xlabel("Number of values n")
    ax.set_ylabel("Height (edges)")
    ax.set_title("Height Stays Logarithmic Regardless of Insertion Order",
                 fontsize=12, fontweight="bold")
    ax.legend(fontsize=9)
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_height_growth.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: viz/02_height_growth.png")


# ---------------------------------------------------------------------------
# Example 3: Rotation Mix
# ---------------------------------------------------------------------------
def example_3_rotation_mix():
    """Which rotation cases each insertion order exercises."""
    print("\n" + "=" * 60)
    print("Example 3: Rotation Mix per Insertion Order")
    print("=" * 60)

    n = 1000
    orders = {
        "Ascending": np.arange(n),
        "Descending": np.arange(n)[::-1],
        "Random": np.random.permutation(n),
        "Random + duplicates": np.random.randint(0, n // 2, size=n),
    }
    cases = ["left_left", "right_right", "left_right", "right_left"]

    counts = {}
    for name, values in orders.items():
        tree = build_tree(values)
        counts[name] = tree.rotation_counts()
        total = sum(counts[name].values())
        print(f"\n  {name}: size={tree.size()}, height={tree.height()}, rotations={total}")
        for case in cases:
            print(f"    {case:>12}: {counts[name][case]}")

    fig, ax = plt.subplots(figsize=(10, 6))
    x = np.arange(len(orders))
    width = 0.2
    palette = [COLORS["blue"], COLORS["red"], COLORS["green"], COLORS["orange"]]
    for i, case in enumerate(cases):
        ax.bar(x + (i - 1.5) * width, [counts[name][case] for name in orders], width,
               label=case.replace("_", "-"), color=palette[i], edgecolor="white")
    ax.set_xticks(x)
    ax.set_xticklabels(list(orders), fontsize=9)
    ax.set_ylabel("Rotations performed")
    ax.set_title(f"Rotation Cases Triggered by {n} Insertions",
                 fontsize=12, fontweight="bold")
    ax.legend(fontsize=9)
    ax.grid(True, alpha=0.3, axis="y")

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_rotation_mix.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: viz/03_rotation_mix.png")


# ---------------------------------------------------------------------------
# Example 4: Balance Factor Distribution
# ---------------------------------------------------------------------------
def example_4_balance_factors():
    """Balance factors of every node after many random insertions."""
    print("\n" + "=" * 60)
    print("Example 4: Balance Factor Distribution")
    print("=" * 60)

    tree = build_tree(np.random.randint(-1000, 1000, size=5000))
    factors = np.array([node.balance_factor() for node in tree.iter_nodes()])
    assert factors.size == tree.size()
    assert np.all(np.abs(factors) <= 1)

    values, frequency = np.unique(factors, return_counts=True)
    print(f"\n  Nodes: {tree.size()}, height: {tree.height()}")
    for v, f in zip(values, frequency):
        print(f"    balance {v:+d}: {f} nodes ({f / factors.size:.1%})")

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar(values, frequency, 0.6, color=COLORS["blue"], edgecolor="white")
    for v, f in zip(values, frequency):
        ax.text(v, f, f"{f / factors.size:.1%}", ha="center", va="bottom",
                fontsize=10, fontweight="bold")
    ax.set_xticks([-1, 0, 1])
    ax.set_xlabel("left_height - right_height")
    ax.set_ylabel("Nodes")
    ax.set_title("Every Node Stays Within One Level of Balance",
                 fontsize=12, fontweight="bold")
    ax.grid(True, alpha=0.3, axis="y")

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "04_balance_factors.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: viz/04_balance_factors.png")


# ---------------------------------------------------------------------------
# PDF Report
# ---------------------------------------------------------------------------
def generate_pdf_report():
    """Generate PDF report: title page followed by one page per visualization."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    report_path = Path(__file__).parent / "report.pdf"
    viz_files = sorted(VIZ_DIR.glob("*.png"))

    with PdfPages(str(report_path)) as pdf:
        fig, ax = plt.subplots(figsize=(11, 8.5))
        ax.axis("off")
        ax.text(0.5, 0.78, "AVL Tree", fontsize=28, fontweight="bold",
                ha="center", va="center", transform=ax.transAxes)
        ax.text(0.5, 0.68, "Insertion, Height Bookkeeping and Rotations",
                fontsize=13, ha="center", va="center", transform=ax.transAxes, color="gray")
        info_text = (
            "Every node records the heights of its two subtrees. After each\n"
            "insertion the path back to the root is rebalanced with single or\n"
            "double rotations so that the two heights never differ by more than one.\n\n"
            "This demo covers:\n"
            "  1. The four rotation cases\n"
            "  2. Height growth against the AVL bound\n"
            "  3. Rotation mix per insertion order\n"
            "  4. Balance factor distribution\n\n"
            f"Random seed: {SEED}\n"
            f"Number of visualizations: {len(viz_files)}"
        )
        ax.text(0.5, 0.30, info_text, fontsize=11, ha="center", va="center",
                transform=ax.transAxes, linespacing=1.6)
        ax.text(0.5, 0.06, "Generated by demo.py", fontsize=10, ha="center",
                va="center", transform=ax.transAxes, style="italic", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        titles = {
            "01_rotation_cases.png": "Example 1: Rotation Cases",
            "02_height_growth.png": "Example 2: Height Growth vs. AVL Bound",
            "03_rotation_mix.png": "Example 3: Rotation Mix per Insertion Order",
            "04_balance_factors.png": "Example 4: Balance Factor Distribution",
        }

        for viz_file in viz_files:
            fig = plt.figure(figsize=(11, 8.5))
            title = titles.get(viz_file.name, viz_file.stem.replace("_", " ").title())
            fig.suptitle(title, fontsize=14, fontweight="bold", y=0.98)

            img = plt.imread(str(viz_file))
            ax = fig.add_axes([0.02, 0.02, 0.96, 0.92])
            ax.imshow(img)
            ax.axis("off")

            pdf.savefig(fig)
            plt.close(fig)

    print(f"  Report saved: report.pdf ({len(viz_files) + 1} pages)")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main():
    print("AVL Tree Demo")
    print("=" * 60)
    print(f"Seed: {SEED}")
    print()

    example_1_rotation_cases()
    example_2_height_growth()
    example_3_rotation_mix()
    example_4_balance_factors()
    generate_pdf_report()

    print("\n" + "=" * 60)
    print("All examples completed successfully.")
    print(f"Visualizations: {VIZ_DIR}/")
    print(f"Report: {Path(__file__).parent / 'report.pdf'}")
    print("=" * 60)


if __name__ == "__main__":
    main()
