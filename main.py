# main.py
"""
Main entry point for the Light Reflection simulation.

This script orchestrates the entire simulation lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Sets up the visualizer and the scene.
4. Runs the main loop: input, motion, ray cascade, drawing.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config
import cProfile
import pstats
import io


def main():
    """
    The main function to run the simulation.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Light Reflection Simulation Starting ---")

    scene_params = config.get('scene_parameters', {})
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from scene import Scene, SceneSettings
    from visualization import Visualizer
    from constants import DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT, FPS

    # --- Component Initialization ---
    # 1. The visualizer first: it owns the window and its real size.
    visualizer = Visualizer(
        width=vis_params.get('width', DEFAULT_WINDOW_WIDTH),
        height=vis_params.get('height', DEFAULT_WINDOW_HEIGHT),
        fps=vis_params.get('fps', FPS),
        resizable=vis_params.get('resizable', True)
    )

    # 2. The scene, sized to the actual framebuffer.
    settings = SceneSettings(scene_params)
    scene = Scene(settings, visualizer.width, visualizer.height)

    profiler = cProfile.Profile()

    log_throttle = run_params.get('log_throttle_steps', 300)
    max_steps = run_params.get('max_steps')  # None runs until the window closes

    running = True
    step_num = 0

    profiler.enable()
    while running:
        # Input mutates positions before the cascade reads them.
        if not visualizer.handle_events(scene):
            break

        delta_time = visualizer.tick()
        scene.update(delta_time)
        visualizer.draw(scene)
        step_num += 1

        # Hot loops must throttle logs
        if step_num % log_throttle == 0:
            light = scene.light_source.position
            logging.info(
                f"Frame {step_num} | Rays: {len(scene.rays.primary)} primary, "
                f"{len(scene.rays.reflected)} reflected | Obstacles: {scene.obstacle_count}"
            )
            logging.debug(
                f"Frame {step_num} | Light at ({light[0]:.1f}, {light[1]:.1f}) | "
                f"Auto-move state: {scene.auto_move.state.value}"
            )

        if max_steps is not None and step_num >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping simulation.")
            running = False
    profiler.disable()

    visualizer.close()
    logging.info("Simulation loop finished.")

    logging.info("--- Performance Profile ---")
    s = io.StringIO()
    # Sort by cumulative time spent in the function
    stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
    stats.print_stats(20)
    logging.info(f"\n{s.getvalue()}")

    logging.info("--- Light Reflection Simulation Shutting Down ---")


if __name__ == "__main__":
    main()
