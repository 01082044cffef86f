# main.py

import pygame
import constants
import logging
import logger_setup
import numpy as np
from fireworks import FireworkShow
from renderer import FrameScheduler, PygameCanvas

# Get the application's dedicated logger
logger = logging.getLogger("fireworks")

import cProfile, pstats, io


def run_show(scheduler, max_frames, profile):
    """
    Drives the frame loop, optionally under cProfile.
    The profile report goes to the application logger.
    """
    if not profile:
        scheduler.run(max_frames=max_frames)
        return

    profiler = cProfile.Profile()
    profiler.enable()
    scheduler.run(max_frames=max_frames)
    profiler.disable()

    logger.info("Profiling complete. Printing stats...")
    s = io.StringIO()
    stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
    stats.print_stats(20) # Print the top 20 time-consuming functions
    logger.info(f"\n{s.getvalue()}")


def main():
    """
    Main function to initialize and run the fireworks show until the window
    is closed (or run_control.max_frames frames have been drawn).
    """
    # --- Setup ---
    config = logger_setup.load_config('config.json')
    logger_setup.setup_logging(config)

    sim_config = config.get('simulation', {})
    display_config = config.get('display', {})
    run_config = config.get('run_control', {})

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    seed = config.get('master_seed')
    rng = np.random.default_rng(seed)
    logger.info(f"Master RNG initialized with seed: {seed if seed is not None else 'fresh entropy'}")

    # --- Initialization ---
    width = display_config.get('width', constants.WIDTH)
    height = display_config.get('height', constants.HEIGHT)
    fps = display_config.get('fps', constants.FPS)

    pygame.init()
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(constants.TITLE)
    screen.fill(constants.BLACK)

    canvas = PygameCanvas(screen)
    scheduler = FrameScheduler(fps=fps)
    show = FireworkShow(
        canvas=canvas,
        scheduler=scheduler,
        config=sim_config,
        rng=rng,
        log_throttle=run_config.get('log_throttle_frames', 300)
    )

    show.start()
    try:
        run_show(scheduler, run_config.get('max_frames'), run_config.get('profile', False))
    finally:
        logger.info(f"Application shutting down after {show.frame_count} frames.")
        pygame.quit()

if __name__ == "__main__":
    main()
