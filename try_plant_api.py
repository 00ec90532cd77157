#!/usr/bin/env python3
"""
手动调用 plantdoc API 的示例脚本（会真实调用 LLM）

使用方法:
1. 确保Django服务器正在运行: python manage.py runserver
2. 运行此脚本: python try_plant_api.py [图片路径] [地区]
"""

import base64
import mimetypes
import sys

import requests

# API配置
BASE_URL = "http://localhost:8000/api"


def encode_image(path):
    """本地图片 → data URL"""
    media_type = mimetypes.guess_type(path)[0] or "image/jpeg"
    with open(path, "rb") as f:
        data = base64.b64encode(f.read()).decode("utf-8")
    return f"data:{media_type};base64,{data}"


def print_list(title, items):
    print(f"\n{title}:")
    if not items:
        print("  (无)")
    for item in items:
        print(f"  - {item}")


def try_disease(image):
    print("\n" + "="*60)
    print("POST /api/disease")
    print("="*60)

    response = requests.post(f"{BASE_URL}/disease", json={"image": image})
    print(f"响应状态码: {response.status_code}")
    data = response.json()

    if response.status_code != 200:
        print(f"\n❌ 请求失败: {data.get('error')}")
        return

    print(f"\n诊断结果: {data['name']} (confidence={data['confidence']})")
    print(f"描述: {data['description']}")
    print_list("治疗", data['treatment'])
    print_list("预防", data['prevention'])


def try_identify(image):
    print("\n" + "="*60)
    print("POST /api/identify")
    print("="*60)

    response = requests.post(f"{BASE_URL}/identify", json={"image": image})
    print(f"响应状态码: {response.status_code}")
    data = response.json()

    if response.status_code != 200:
        print(f"\n❌ 请求失败: {data.get('error')}")
        return

    print(f"\n识别结果: {data['name']} / {data['scientificName']} (confidence={data['confidence']})")
    print(f"描述: {data['description']}")
    print_list("养护建议", data['careTips'])
    print_list("常见问题", data['problems'])


def try_suggestions(region):
    print("\n" + "="*60)
    print(f"GET /api/suggestions?region={region}")
    print("="*60)

    response = requests.get(f"{BASE_URL}/suggestions", params={"region": region})
    print(f"响应状态码: {response.status_code}")
    data = response.json()

    if not data.get("success"):
        print(f"\n❌ 请求失败: {data.get('error')}")
        return

    for plant in data["data"]:
        print(f"\n🌱 {plant['name']} ({plant['scientificName']})")
        print(f"   {plant['description']}")


def main():
    image_path = sys.argv[1] if len(sys.argv) > 1 else None
    region = sys.argv[2] if len(sys.argv) > 2 else "Kerala"

    try:
        if image_path:
            image = encode_image(image_path)
            try_disease(image)
            try_identify(image)
        else:
            print("\n跳过图片测试（未提供图片路径）")

        try_suggestions(region)

    except requests.exceptions.ConnectionError:
        print("\n❌ 连接错误: 无法连接到服务器")
        print("请确保Django服务器正在运行: python manage.py runserver")


if __name__ == "__main__":
    main()
