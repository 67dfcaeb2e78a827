"""合并 / 拼接两个 WAV 文件示例"""
import sys

from pcmwav import PCMAudioError, concat_files, merge_files
from pcmwav.log import configure_logging


def main(argv: list) -> int:
    if len(argv) != 5 or argv[1] not in ("merge", "concat"):
        print("用法: python combine_wav.py merge|concat <left.wav> <right.wav> <out.wav>")
        return 1

    mode, left, right, output = argv[1:]
    configure_logging()

    try:
        if mode == "merge":
            frames = merge_files(left, right, output)
            print(f"合并完成: {frames} 个立体声帧 -> {output}")
        else:
            written = concat_files(left, right, output)
            print(f"拼接完成: {written} 字节音频数据 -> {output}")
    except PCMAudioError as e:
        print(f"处理失败: {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
