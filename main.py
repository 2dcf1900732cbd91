"""
Main entry point for tree growth.

Grows a tree with the space colonization algorithm, either step by step
(reporting metrics along the way) or fast-forwarded to full growth, then
saves the final drawing and growth statistics.
"""

import argparse
from pathlib import Path

from tqdm import tqdm

from canopy import Tree, load_config, visualize_tree, animate_growth, plot_growth_statistics


def report_metrics(tree: Tree):
    m = tree.metrics()
    tqdm.write(f"Step {m['iteration']}: {m['branches']} branches, {m['segments']} segments, "
               f"{m['attraction_points']} attraction points")


def grow_stepped(tree: Tree, metrics_interval: int):
    max_steps = tree.config.max_steps
    for _ in tqdm(range(max_steps), desc="Growing"):
        tree.update()
        if metrics_interval and tree.iteration % metrics_interval == 0:
            report_metrics(tree)
        if tree.fully_grown:
            break


def main():
    parser = argparse.ArgumentParser(description="Grow a 2D tree with the space colonization algorithm.")
    parser.add_argument('--config', type=str, default='config/tree.json',
                        help='Path to a JSON config file (defaults are used if missing)')
    parser.add_argument('--mode', type=str, choices=['step', 'fast'], default='fast',
                        help='step: one update per iteration with metrics, fast: grow to completion')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for attraction point placement')
    parser.add_argument('--animate', action='store_true', help='Save a GIF of the growth')
    parser.add_argument('--no-show', action='store_true', help='Do not open plot windows')
    parser.add_argument('--profile', action='store_true', help='Print per-phase timings')
    parser.add_argument('--metrics-interval', type=int, default=10,
                        help='Report metrics every N steps in step mode (0 disables)')
    args = parser.parse_args()

    config = load_config(args.config)
    if args.seed is not None:
        config.random_seed = args.seed
    if args.profile:
        config.profile = True
    config.verbose = args.mode == 'fast'

    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    show = not args.no_show

    if args.animate or config.animate:
        animate_growth(
            config,
            show_attractors=config.show_attractors,
            save_path=str(output_dir / 'tree_growth.gif'),
            frame_skip=5,
            show=show
        )
        return

    tree = Tree(config)
    if args.mode == 'step':
        grow_stepped(tree, args.metrics_interval)
    else:
        tree.grow()

    report_metrics(tree)
    if not tree.fully_grown:
        print(f"Warning: tree not fully grown after {tree.iteration} steps")

    visualize_tree(
        tree,
        show_attractors=config.show_attractors,
        save_path=str(output_dir / 'tree.png'),
        show=show
    )
    plot_growth_statistics(tree, save_path=str(output_dir / 'tree_stats.png'), show=show)

    if config.profile:
        tree.profiler.print_stats()


if __name__ == '__main__':
    main()
