"""Entry: webcam mood detection with a small console for playback control.

Usage:
    python -m moody.client.main [--api-url URL] [--camera-index N] [--interval SEC]

Commands: camera, detect, list, play N, vol V, mute, upload PATH TITLE ARTIST MOOD, quit
"""
import argparse
import logging
import shlex

from moody.client.audio_output import PygameAudioOutput
from moody.client.camera import OpenCVCamera
from moody.client.catalog_client import SongCatalogClient
from moody.client.expression import DeepFaceClassifier
from moody.client.mood_sampler import MoodSampler
from moody.client.playback import PlaybackController
from moody.client.player import MoodPlayer
from moody.config import API_URL, CAMERA_INDEX, DEFAULT_VOLUME, DETECT_INTERVAL_SEC, DETECTOR_BACKEND
from moody.core.errors import CameraError, UploadFailure


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Moody Player - mood-based song picker")
    parser.add_argument("--api-url", default=API_URL, help="Base URL of the song API")
    parser.add_argument("--camera-index", type=int, default=CAMERA_INDEX, help="OpenCV camera index")
    parser.add_argument("--interval", type=float, default=DETECT_INTERVAL_SEC, help="Seconds between detections")
    parser.add_argument(
        "--detector-backend",
        default=DETECTOR_BACKEND,
        help="Face detector backend passed to DeepFace (default opencv)",
    )
    parser.add_argument("--volume", type=float, default=DEFAULT_VOLUME, help="Initial volume 0..1")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def _print_songs(player: MoodPlayer) -> None:
    songs = player.songs
    if not songs:
        print("No songs to show.")
        return
    active = player.playback.session
    for i, s in enumerate(songs):
        marker = " "
        if i == active.active_index:
            marker = ">" if active.is_playing else "|"
        print(f"{marker} {i}: {s.title} - {s.artist} [{s.mood}]")


def handle_command(player: MoodPlayer, line: str) -> bool:
    """Run one console command. Returns False when the user asked to quit."""
    parts = shlex.split(line)
    if not parts:
        return True
    cmd, args = parts[0].lower(), parts[1:]
    sampler = player.sampler
    if cmd in ("quit", "exit", "q"):
        return False
    if cmd == "camera":
        if sampler.session.camera_active:
            sampler.stop()
            print("Camera stopped.")
        else:
            try:
                sampler.start()
                print("Camera started.")
            except CameraError as e:
                print(e.user_message)
    elif cmd == "detect":
        if sampler.session.detection_active:
            sampler.stop_detection()
            print("Detection stopped.")
        elif not sampler.session.camera_active:
            print("Start the camera first.")
        else:
            sampler.start_detection()
            print("Detecting mood...")
    elif cmd == "list":
        _print_songs(player)
    elif cmd == "play" and len(args) == 1 and args[0].isdigit():
        player.playback.select(int(args[0]))
        _print_songs(player)
    elif cmd == "vol" and len(args) == 1:
        try:
            player.playback.set_volume(float(args[0]))
        except ValueError:
            print("Volume must be a number between 0 and 1.")
    elif cmd == "mute":
        player.playback.toggle_mute()
        print("Muted." if player.playback.session.muted else "Unmuted.")
    elif cmd == "upload" and len(args) == 4:
        path, title, artist, mood = args
        try:
            song = player.catalog.upload(path, title=title, artist=artist, mood=mood)
            print(f"Uploaded {song.title} ({song.audio_url})")
        except UploadFailure as e:
            print(f"Upload failed: {e}")
    else:
        print(__doc__.strip().splitlines()[-1])
    return True


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(name)s: %(message)s",
    )
    sampler = MoodSampler(
        OpenCVCamera(args.camera_index),
        DeepFaceClassifier(detector_backend=args.detector_backend),
        interval_sec=args.interval,
    )
    output = PygameAudioOutput()
    player = MoodPlayer(
        sampler,
        SongCatalogClient(args.api_url),
        PlaybackController(output, volume=args.volume),
    )
    print("Loading models...")
    sampler.load_models()
    print(__doc__.strip().splitlines()[-1])
    try:
        while True:
            try:
                line = input("moody> ")
            except EOFError:
                break
            if not handle_command(player, line):
                break
    except KeyboardInterrupt:
        pass
    finally:
        player.close()
        output.close()


if __name__ == "__main__":
    main()
