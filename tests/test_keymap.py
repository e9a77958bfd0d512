"""Tests for key bindings."""

import pygame

from blobflock.keymap import KEY_HELP_TEXT, KEY_NAMES, KeyMap


def test_every_action_has_help():
    assert set(KEY_HELP_TEXT) == set(KEY_NAMES)


def test_bindings_are_unique():
    codes = [code for bound in KEY_NAMES.values() for code in bound]
    assert len(set(codes)) == len(codes)


def test_lookup_both_ways():
    keymap = KeyMap()
    assert keymap.code("pause") == pygame.K_LSHIFT
    assert keymap.action(pygame.K_LSHIFT) == "pause"
    assert keymap.action(pygame.K_F12) is None
    assert keymap.code("nope") is None


def test_either_shift_pauses():
    keymap = KeyMap()
    assert keymap.action(pygame.K_RSHIFT) == "pause"
    assert keymap.codes("pause") == (pygame.K_LSHIFT, pygame.K_RSHIFT)


def test_custom_bindings():
    keymap = KeyMap({"pause": pygame.K_SPACE, "slow": [pygame.K_s, pygame.K_d]})
    assert keymap.action(pygame.K_SPACE) == "pause"
    assert keymap.action(pygame.K_d) == "slow"
    assert keymap.code("slow") == pygame.K_s
    assert keymap.code("reverse") is None
    assert keymap.codes("reverse") == ()
