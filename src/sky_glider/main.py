"""
Sky Glider - fly through the rings, dodge the hazards
=====================================================

Interactive pygame front end for the glider simulation. Controls:
W/S pitch, A/D turn, Space thrust, R reset, Esc quit.
"""
from __future__ import annotations

import argparse
import sys
from typing import Mapping, Optional, Sequence

import pygame

from sky_glider.core.config import FLIGHT_CFG, RENDER_CFG
from sky_glider.core.logging_utils import RunLogger
from sky_glider.core.model import InputSignal
from sky_glider.core.session import GliderGame
from sky_glider.core.timekeeping import FrameTimer
from sky_glider.data.courses import COURSE_DISPLAY_ORDER, COURSES, DEFAULT_COURSE_KEY
from sky_glider.render import (
    Button,
    ButtonVisualStyle,
    Camera,
    banner_lines,
    build_text_panel,
    draw_scene,
    hud_lines,
    load_font,
)

PITCH_UP_KEY = pygame.K_w
PITCH_DOWN_KEY = pygame.K_s
TURN_LEFT_KEY = pygame.K_a
TURN_RIGHT_KEY = pygame.K_d
THRUST_KEY = pygame.K_SPACE
RESET_KEY = pygame.K_r


def input_from_keys(pressed: Mapping[int, bool] | Sequence[bool]) -> InputSignal:
    """Translate held keys into this frame's control input."""

    pitch = int(bool(pressed[PITCH_UP_KEY])) - int(bool(pressed[PITCH_DOWN_KEY]))
    yaw = int(bool(pressed[TURN_LEFT_KEY])) - int(bool(pressed[TURN_RIGHT_KEY]))
    return InputSignal(pitch_input=pitch, yaw_input=yaw, thrust_on=bool(pressed[THRUST_KEY]))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sky Glider - fly through rings, avoid obstacles.")
    parser.add_argument(
        "--course",
        choices=COURSE_DISPLAY_ORDER,
        default=DEFAULT_COURSE_KEY,
        help="Course to fly (default: %(default)s)",
    )
    parser.add_argument(
        "--fixed-step",
        action="store_true",
        help=f"Integrate in fixed {FLIGHT_CFG.fixed_dt:.4f} s steps instead of the frame delta",
    )
    parser.add_argument("--log", action="store_true", help="Record flight telemetry to CSV")
    parser.add_argument("--log-dir", default="data/runs", help="Directory for run logs")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    render_cfg = RENDER_CFG

    logger = RunLogger(args.log_dir) if args.log else None
    game = GliderGame(
        COURSES[args.course],
        FLIGHT_CFG,
        fixed_step=FLIGHT_CFG.fixed_dt if args.fixed_step else None,
        logger=logger,
    )

    pygame.init()
    pygame.display.set_caption(f"Sky Glider - {game.course.name}")
    screen = pygame.display.set_mode((render_cfg.width, render_cfg.height), pygame.RESIZABLE)
    clock = pygame.time.Clock()
    hud_font = load_font(18)
    banner_font = load_font(28, bold=True)

    camera = Camera(
        screen.get_size(),
        fov=render_cfg.camera_fov,
        near=render_cfg.camera_near,
        far=render_cfg.camera_far,
        distance=render_cfg.camera_distance,
        height=render_cfg.camera_height,
        look_ahead=render_cfg.camera_look_ahead,
        smoothing=render_cfg.camera_smoothing,
    )
    start = game.state.glider
    camera.follow(start.position, start.yaw, start.pitch, snap=True)

    timer = FrameTimer()

    def reset_run() -> None:
        game.reset(timer.elapsed)
        glider = game.state.glider
        camera.follow(glider.position, glider.yaw, glider.pitch, snap=True)

    reset_button = Button(
        (16, render_cfg.height - 60, 140, 44),
        "Reset (R)",
        reset_run,
        style=ButtonVisualStyle.from_cfg(render_cfg),
    )

    running = True
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    camera.update_size(screen.get_size())
                    reset_button.rect.bottomleft = (16, screen.get_height() - 16)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == RESET_KEY:
                        reset_run()
                reset_button.handle_event(event)

            delta = timer.tick()
            signal = input_from_keys(pygame.key.get_pressed())
            snapshot = game.step(signal, timer.elapsed, delta)

            camera.follow(snapshot.position, snapshot.yaw, snapshot.pitch)
            draw_scene(screen, camera, game, snapshot, render_cfg=render_cfg)

            panel = build_text_panel(
                hud_font,
                hud_lines(snapshot, len(game.rings), game.course.name, render_cfg=render_cfg),
                background_color=render_cfg.hud_background_color,
            )
            screen.blit(panel, (16, 16))

            banner = banner_lines(snapshot, len(game.rings), render_cfg=render_cfg)
            if banner:
                banner_panel = build_text_panel(
                    banner_font,
                    banner,
                    background_color=render_cfg.banner_background_color,
                    padding=(28, 20),
                )
                screen.blit(banner_panel, banner_panel.get_rect(center=screen.get_rect().center))

            reset_button.draw(screen, hud_font)
            pygame.display.flip()
            clock.tick(render_cfg.target_fps)
    finally:
        game.close()
        pygame.quit()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pygame.quit()
        sys.exit()
