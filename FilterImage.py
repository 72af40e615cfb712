#!/usr/bin/env python3
"""
Blur or sharpen the first .jpg found in the images/ folder.

Usage: python3 FilterImage.py [input_dir]
"""
import sys
from pathlib import Path

import numpy as np
from PIL import Image

import ConvParallel
from ConvKernels import force_odd, generate_box_blur_kernel, generate_sharpen_kernel

# Configuration
INPUT_DIR = "images"
DEFAULT_BLUR_STRENGTH = 5
N_JOBS = -1  # -1 uses all available cores
IMAGE_EXTENSIONS = (".jpg", ".jpeg")


def load_image(path):
    """Decode an image file into an (H, W, 3) uint8 array."""
    with Image.open(path) as img:
        return np.array(img.convert("RGB"))


def save_image(arr, path):
    """Encode an (H, W, 3) uint8 array; the format comes from the file extension."""
    Image.fromarray(np.asarray(arr, dtype=np.uint8)).save(path)


def find_image(input_dir=INPUT_DIR):
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        print(f"Error: '{input_dir}' folder does not exist. Please create it and add a .jpg file.")
        return None

    for path in sorted(input_dir.iterdir()):
        if path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS:
            return str(path)

    print(f"Error: No .jpg files found in '{input_dir}'. Please add an image and try again.")
    return None


def parse_blur_strength(text):
    """Parse the blur strength typed by the user; falls back to the default, always odd."""
    try:
        strength = int(text.strip())
    except ValueError:
        strength = None

    if strength is None or strength < 0:
        print(f"Invalid blur strength '{text.strip()}', using {DEFAULT_BLUR_STRENGTH}.")
        strength = DEFAULT_BLUR_STRENGTH

    return force_odd(strength)


def output_path(image_path, mode, strength=None, output_dir=INPUT_DIR):
    stem = Path(image_path).stem
    if mode == "blur":
        name = f"{stem}_blurred_{strength}.jpg"
    elif mode == "sharpen":
        name = f"{stem}_sharpened.jpg"
    else:
        raise ValueError(f"Unknown filter mode: {mode!r}")
    return str(Path(output_dir) / name)


def blur_image(input_path, output_path, blur_size, n_jobs=N_JOBS):
    """Blur an image with a box kernel of the given (rounded up to odd) size."""
    blur_size = force_odd(blur_size)

    arr = load_image(input_path)
    kernel = generate_box_blur_kernel(blur_size)
    result = ConvParallel.apply_convolution(arr, kernel, n_jobs=n_jobs)
    save_image(result, output_path)

    print(f"Blurred image saved to '{output_path}'")
    return result


def sharpen_image(input_path, output_path, n_jobs=N_JOBS):
    arr = load_image(input_path)
    result = ConvParallel.apply_convolution(arr, generate_sharpen_kernel(), n_jobs=n_jobs)
    save_image(result, output_path)

    print(f"Sharpened image saved to '{output_path}'")
    return result


def main(input_dir=INPUT_DIR, n_jobs=N_JOBS):
    image_path = find_image(input_dir)
    if image_path is None:
        print(f"Error: No '.jpg' found in '{input_dir}'. Exiting.", file=sys.stderr)
        return 1

    print("Please enter 1 for Blur or 2 for Sharpen.")
    choice = input().strip()

    try:
        if choice == "1":
            strength = parse_blur_strength(input("Enter blur strength (odd value, i.e., 3, 5, 7): "))
            modified = output_path(image_path, "blur", strength, output_dir=input_dir)
            print(f"Applying blur with strength {strength}...")
            blur_image(image_path, modified, strength, n_jobs=n_jobs)
        elif choice == "2":
            modified = output_path(image_path, "sharpen", output_dir=input_dir)
            print("Sharpening the image...")
            sharpen_image(image_path, modified, n_jobs=n_jobs)
        else:
            print("Invalid choice! Please enter 1 for Blur or 2 for Sharpen.")
            return 1
    except OSError as e:
        print(f"Error: {e}")
        return 1

    print(f"Processing complete. Output saved as '{modified}'")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else INPUT_DIR))
