#!/usr/bin/env python3
"""
heart_swarm.py — interactive particle swarm that folds into a heart

A swarm of faint purple points wanders the window, linked by thin lines where
they drift close. Move the pointer through them to stir them up; click or
tap to send a pulse and scramble everything for a moment. Press the Transform
button (or h) and most of the swarm flows into a heart while the rest keeps
wandering around it.

Keys (while running):
  Esc/q  — Quit
  f      — Toggle fullscreen
  h/Enter— Form the heart
  d      — Toggle HUD (fps, mode, lines, pulse)
  s      — Save screenshot to ./screenshots

Mouse/touch:
  move   — stir particles near the pointer
  click  — pulse + scramble (on the button: also forms the heart)

Requires: pygame, numpy
Run: python3 heart_swarm.py --preset classic --size 1600x900
"""
import argparse
import os
import sys
import time

import pygame

from swarm_config import add_swarm_arguments, config_from_args
from swarm_engine import Swarm
from swarm_surface import PygameSurface

TITLE = "Heart Swarm"
BUTTON_SIZE = (180, 50)
BUTTON_COLOR = (138, 43, 226)
BUTTON_TEXT = (255, 255, 255)
MESSAGE_COLOR = (230, 230, 250)
HUD_COLOR = (120, 100, 150)


def button_rect(width, height):
    w, h = BUTTON_SIZE
    return pygame.Rect((width - w) // 2, height - h - 40, w, h)


def draw_button(screen, font):
    """Draw the transform button and return its rect for hit testing."""
    rect = button_rect(*screen.get_size())
    pygame.draw.rect(screen, BUTTON_COLOR, rect, border_radius=25)
    text = font.render("Transform", True, BUTTON_TEXT)
    screen.blit(text, text.get_rect(center=rect.center))
    return rect


def draw_message(screen, font, message):
    text = font.render(message, True, MESSAGE_COLOR)
    w, h = screen.get_size()
    screen.blit(text, text.get_rect(center=(w // 2, h - 60)))


def draw_hud(screen, font, swarm, clock):
    txt = (f"{TITLE} | {swarm.cfg.preset} | fps:{clock.get_fps():4.1f} | mode:{swarm.mode.value} "
           f"| particles:{len(swarm.particles)} | lines:{swarm.line_count} | pulse:{swarm.state.pulse:5.1f}"
           f" | scramble:{'on' if swarm.state.scramble_active else 'off'}")
    screen.blit(font.render(txt, True, HUD_COLOR), (18, 14))


def open_window(size, fullscreen):
    if fullscreen:
        return pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
    return pygame.display.set_mode(size, pygame.RESIZABLE)


def save_screenshot(screen):
    os.makedirs('screenshots', exist_ok=True)
    path = time.strftime('screenshots/heartswarm_%Y%m%d_%H%M%S.png')
    pygame.image.save(screen, path)
    print('[SHOT] Saved', path)


def main(argv=None):
    ap = argparse.ArgumentParser(description='Interactive particle swarm that forms a heart')
    add_swarm_arguments(ap)
    ap.add_argument('--fullscreen', action='store_true', help='Start fullscreen')
    ap.add_argument('--hud', action='store_true', help='Show the HUD line on start')
    ap.add_argument('--message', default='made with love', help='Text shown once the heart forms')
    args = ap.parse_args(argv)

    try:
        cfg = config_from_args(args)
    except (KeyError, ValueError) as e:
        print(f"[ERROR] {e}")
        return 1

    pygame.init()
    pygame.display.set_caption(TITLE)
    screen = open_window(args.size, args.fullscreen)
    windowed_size = args.size
    is_full = args.fullscreen
    clock = pygame.time.Clock()
    button_font = pygame.font.SysFont(None, 32)
    message_font = pygame.font.SysFont(None, 40)
    hud_font = pygame.font.SysFont(None, 24)

    width, height = screen.get_size()
    swarm = Swarm(cfg, width, height)
    canvas = PygameSurface(screen)
    show_hud = args.hud
    show_button = True

    def form_heart():
        nonlocal show_button
        swarm.activate_formation()
        show_button = False

    def refit(new_screen):
        nonlocal screen
        screen = new_screen
        canvas.retarget(screen)
        swarm.resize(*screen.get_size())

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    running = False
                elif event.key == pygame.K_f:
                    is_full = not is_full
                    refit(open_window(windowed_size, is_full))
                elif event.key in (pygame.K_h, pygame.K_RETURN):
                    form_heart()
                elif event.key == pygame.K_d:
                    show_hud = not show_hud
                elif event.key == pygame.K_s:
                    save_screenshot(screen)
            elif event.type == pygame.VIDEORESIZE and not is_full:
                windowed_size = (event.w, event.h)
                refit(pygame.display.get_surface())
            # pygame mirrors touches as mouse events; those carry touch=True
            elif event.type == pygame.MOUSEMOTION and not getattr(event, 'touch', False):
                swarm.pointer_move(*event.pos)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, 'touch', False):
                swarm.pointer_down(*event.pos)
                if show_button and button_rect(*screen.get_size()).collidepoint(event.pos):
                    form_heart()
            elif event.type == pygame.WINDOWLEAVE:
                swarm.pointer_up()
            elif event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION, pygame.FINGERUP):
                w, h = screen.get_size()
                x, y = event.x * w, event.y * h
                if event.type == pygame.FINGERDOWN:
                    swarm.pointer_down(x, y)
                    if show_button and button_rect(w, h).collidepoint(x, y):
                        form_heart()
                elif event.type == pygame.FINGERMOTION:
                    swarm.pointer_move(x, y)
                else:
                    swarm.pointer_up()

        swarm.tick(canvas)
        canvas.present()

        if show_button:
            draw_button(screen, button_font)
        else:
            draw_message(screen, message_font, args.message)
        if show_hud:
            draw_hud(screen, hud_font, swarm, clock)

        pygame.display.flip()
        clock.tick(args.fps)

    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
